"""Templator - render provisioning templates against node and cluster data."""

from templator.core.errors import (
    DataParseError,
    EditorError,
    TemplateRenderError,
    TemplatorError,
)
from templator.core.templator import Templator

__version__ = "0.1.0"

__all__ = [
    "Templator",
    "TemplatorError",
    "TemplateRenderError",
    "DataParseError",
    "EditorError",
]
