"""Shared utilities for Templator CLI commands."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from templator.core.data import load_data
from templator.core.errors import DataParseError


def load_context(context_path: Optional[str]) -> Optional[Any]:
    """Load a YAML mapping to render against, or None for the null context.

    Raises:
        FileNotFoundError: The context file does not exist
        DataParseError: The file is not a YAML mapping
    """
    if context_path is None:
        return None

    path = Path(context_path)
    if not path.exists():
        raise FileNotFoundError(f"Context file not found: {context_path}")

    text = path.read_text()
    data = load_data(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataParseError(f"Context file {context_path} must contain a mapping", text)
    return data


def read_template(template_path: str) -> str:
    """Read template text from a file, or from stdin when the path is '-'."""
    if template_path == "-":
        return typer.get_text_stream("stdin").read()

    path = Path(template_path)
    if not path.exists():
        raise FileNotFoundError(f"Template not found: {template_path}")
    return path.read_text()


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from templator.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def log_and_print(
    console: Console,
    logger: logging.Logger,
    message: str,
    level: int = logging.INFO,
) -> None:
    """Show message to the user and record it in the log.

    Args:
        console: Rich console for output
        logger: Logger that records the message
        message: Message text
        level: Logging level (default: INFO)
    """
    styles = {logging.ERROR: "red", logging.WARNING: "yellow"}
    console.print(escape(message), style=styles.get(level))
    logger.log(level, message)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting.

    Args:
        console: Rich console for output
        message: Success message
        prefix: Prefix symbol (default: ✓)
    """
    console.print(f"[green]{prefix}[/green] {message}", soft_wrap=True)
