"""Templator runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_EDITOR = "vi"
DEFAULT_LOG_FILE = "/var/log/templator/templator.log"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass
class TemplatorConfig:
    """Runtime configuration for Templator operations.

    Attributes:
        editor: Command used to open rendered text for editing (default: vi)
        edit_suffix: File suffix of the temporary file handed to the editor
        markdown_width: Terminal width used when formatting Markdown (default: 80)
        markdown_color: Emit ANSI styling when formatting Markdown (default: True)
        log_file: Log file used by the command line (default: /var/log/templator/templator.log,
            or /tmp/templator.log when that directory is not writable)
    """

    editor: str = DEFAULT_EDITOR
    edit_suffix: str = ".txt"
    markdown_width: int = 80
    markdown_color: bool = True
    log_file: str = DEFAULT_LOG_FILE

    @classmethod
    def from_env(cls) -> "TemplatorConfig":
        """Create config from environment variables.

        Environment variables:
            TEMPLATOR_EDITOR: Editor command, falling back to VISUAL then EDITOR
            TEMPLATOR_EDIT_SUFFIX: Suffix for the temporary edit file
            TEMPLATOR_MARKDOWN_WIDTH: Width of formatted Markdown output
            TEMPLATOR_MARKDOWN_COLOR: 1/0 to toggle styled Markdown output
            TEMPLATOR_LOG_FILE: Log file path

        Returns:
            TemplatorConfig instance with values from environment or defaults
        """
        editor = (
            os.getenv("TEMPLATOR_EDITOR")
            or os.getenv("VISUAL")
            or os.getenv("EDITOR")
            or cls.editor
        )
        return cls(
            editor=editor,
            edit_suffix=os.getenv("TEMPLATOR_EDIT_SUFFIX", cls.edit_suffix),
            markdown_width=int(
                os.getenv("TEMPLATOR_MARKDOWN_WIDTH", cls.markdown_width)
            ),
            markdown_color=_env_flag("TEMPLATOR_MARKDOWN_COLOR", cls.markdown_color),
            log_file=os.getenv("TEMPLATOR_LOG_FILE", cls.log_file),
        )


# Global config instance (can be overridden)
_config: Optional[TemplatorConfig] = None


def get_config() -> TemplatorConfig:
    """Get the global Templator configuration.

    Returns:
        TemplatorConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = TemplatorConfig.from_env()
    return _config


def set_config(config: Optional[TemplatorConfig]) -> None:
    """Override the global configuration (None resets to environment)."""
    global _config
    _config = config
