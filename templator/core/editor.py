"""Blocking hand-off of text to an interactive external editor."""
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from templator.core.config import get_config
from templator.core.errors import EditorError
from templator.core.logger import get_logger

logger = get_logger(__name__)


class Editor:
    """Opens content in an external editor and returns what the user saved.

    The wait for the editor process has no timeout and cannot be cancelled.
    """

    def __init__(self, command: Optional[str] = None, suffix: Optional[str] = None):
        """Initialize editor.

        Args:
            command: Editor command line (default: configured editor)
            suffix: Suffix for the temporary file (default: configured suffix)
        """
        config = get_config()
        self.command = command if command is not None else config.editor
        self.suffix = suffix if suffix is not None else config.edit_suffix

    def argv(self, path: Path) -> List[str]:
        """Build the argument vector that opens path in the editor."""
        args = shlex.split(self.command)
        if not args:
            raise EditorError("No editor configured (set TEMPLATOR_EDITOR or EDITOR)")
        return args + [str(path)]

    def edit(self, content: str) -> str:
        """Write content to a temporary file, open it, and return the saved text.

        Raises:
            EditorError: The editor failed or its file could not be read back
        """
        fd, name = tempfile.mkstemp(prefix="templator-", suffix=self.suffix)
        path = Path(name)
        try:
            with os.fdopen(fd, "w", newline="") as handle:
                handle.write(content)

            self.launch(path)

            try:
                with open(path, "r", newline="") as handle:
                    return handle.read()
            except OSError as e:
                raise EditorError(f"Unable to read edited file {path}: {e}") from e
        finally:
            if path.exists():
                path.unlink()

    def launch(self, path: Path) -> None:
        """Run the editor against path and wait for it to exit."""
        argv = self.argv(path)
        logger.debug(f"Launching editor: {' '.join(argv)}")

        try:
            result = subprocess.run(argv, check=False)
        except OSError as e:
            raise EditorError(f"Unable to launch editor '{argv[0]}': {e}") from e

        if result.returncode != 0:
            raise EditorError(
                f"Editor '{self.command}' exited with status {result.returncode}"
            )
