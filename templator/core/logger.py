"""Unified logging for Templator with console and file output."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

ROOT_LOGGER = "templator"

# Log file configuration
LOG_DIR = Path("/var/log/templator")
LOG_FILE = LOG_DIR / "templator.log"
FALLBACK_LOG_FILE = Path("/tmp/templator.log")

# Handler installed by setup_file_logging(), replaced when the path changes
_file_handler: Optional[logging.FileHandler] = None


def _writable_log_path(log_file: Path) -> Path:
    """Create the log directory, falling back to /tmp when it is not writable."""
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        return log_file
    except PermissionError:
        FALLBACK_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        return FALLBACK_LOG_FILE


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Send every ``templator.*`` record to a log file.

    Args:
        log_file: Path to log file (defaults to /var/log/templator/templator.log)
        verbose: Enable debug-level logging

    Returns:
        The path that log records are written to

    Note:
        Calling again with the same path only adjusts the level; a new
        path replaces the previous file handler.
    """
    global _file_handler

    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)

    target_log_file = _writable_log_path(Path(log_file) if log_file else LOG_FILE)

    if _file_handler is not None:
        if Path(_file_handler.baseFilename) == target_log_file.absolute():
            _file_handler.setLevel(level)
            return target_log_file
        root_logger.removeHandler(_file_handler)
        _file_handler.close()

    _file_handler = logging.FileHandler(target_log_file)
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(_file_handler)

    root_logger.info(f"Templator logging initialized: {target_log_file}")
    return target_log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger that prints INFO and above to the console.

    The level itself lives on the ``templator`` root logger, so
    setup_file_logging(verbose=True) lets DEBUG records from every module
    reach the log file.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    if root_logger.level == logging.NOTSET:
        root_logger.setLevel(logging.INFO)

    logger = logging.getLogger(name)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, level=logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
