"""Structured parsing and presentation of rendered text."""
import sys
from typing import Any

import yaml
from rich.console import Console
from rich.markdown import Markdown

from templator.core.errors import DataParseError


class SymbolLoader(yaml.SafeLoader):
    """Safe YAML loader that interns string mapping keys.

    Only plain data is constructed; tags such as ``!!python/object`` are
    rejected by the safe constructor.
    """

    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)
        return {
            (sys.intern(key) if isinstance(key, str) else key): value
            for key, value in mapping.items()
        }


def load_data(text: str) -> Any:
    """Parse text as safe YAML with interned keys.

    Raises:
        DataParseError: text is not valid safe YAML
    """
    try:
        return yaml.load(text, Loader=SymbolLoader)
    except yaml.YAMLError as e:
        raise DataParseError(f"Invalid YAML: {e}", text) from e


def format_markdown(text: str, width: int = 80, color: bool = True) -> str:
    """Convert Markdown text to a string ready to print on a terminal."""
    console = Console(
        width=width,
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
    )
    with console.capture() as capture:
        console.print(Markdown(text))
    return capture.get()
