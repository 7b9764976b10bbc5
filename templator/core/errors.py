"""Exceptions raised by Templator operations."""
from typing import Optional


class TemplatorError(Exception):
    """Base class for every error surfaced to Templator callers."""
    pass


class TemplateRenderError(TemplatorError):
    """Raised when a template fails to compile or an unguarded expression fails."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class DataParseError(TemplatorError):
    """Raised when rendered text is not valid safe YAML."""

    def __init__(self, message: str, text: str):
        self.text = text
        super().__init__(f"{message}\n--- offending text ---\n{text}")


class EditorError(TemplatorError):
    """Raised when the external editor cannot be run or its file cannot be read."""
    pass
