"""Jinja2 environment shared by every Templator."""
import re
from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined
from jinja2.ext import Extension
from jinja2.runtime import Context, missing

# Reserved template variable carrying the Binding into the render context
BINDING_VAR = "__templator_binding__"

_TAG = r"\{%(?:[^%]|%(?!\}))*?%\}"
_COMMENT = r"\{#(?:[^#]|#(?!\}))*?#\}"

BLOCK_TAG = re.compile(r"\{%([-+]?)(?:[^%]|%(?!\}))*?([-+]?)%\}")
RAW_BLOCK = re.compile(
    r"\{%[-+]?\s*raw\s*[-+]?%\}.*?\{%[-+]?\s*endraw\s*[-+]?%\}", re.DOTALL
)
# A line made only of block tags and comments, with optional surrounding blanks
STANDALONE_LINE = re.compile(rf"[ \t]*(?:(?:{_TAG}|{_COMMENT})[ \t]*)+\r?")


def mark_inline_tags(source: str) -> str:
    """Exempt block tags that share a line with other content from trimming.

    ``{%+`` turns off lstrip_blocks and ``+%}`` turns off trim_blocks for a
    single tag, so only lines holding nothing but control tags lose their
    indentation and newline. Characters are only inserted within lines,
    so template line numbers are unchanged.
    """
    raw_spans = [m.span() for m in RAW_BLOCK.finditer(source)]
    parts = []
    pos = 0
    for match in BLOCK_TAG.finditer(source):
        start, end = match.span()
        if any(s <= start < e for s, e in raw_spans):
            continue

        line_start = source.rfind("\n", 0, start) + 1
        line_end = source.find("\n", end)
        if line_end == -1:
            line_end = len(source)
        if STANDALONE_LINE.fullmatch(source, line_start, line_end):
            continue

        tag = match.group(0)
        if not match.group(2):
            tag = tag[:-2] + "+%}"
        if not match.group(1) and not source[line_start:start].strip(" \t"):
            tag = "{%+" + tag[2:]
        parts.append(source[pos:start])
        parts.append(tag)
        pos = end

    parts.append(source[pos:])
    return "".join(parts)


class StandaloneTagExtension(Extension):
    """Trim only lines made entirely of control tags.

    ``a={% if x %}1{% endif %}`` keeps its line break while a line holding
    just ``{% if x %}`` leaves no blank line behind.
    """

    def preprocess(self, source, name, filename=None):
        return mark_inline_tags(source)


class BindingContext(Context):
    """Render context that resolves names through the Templator binding.

    Template-local variables win, then the binding, then whatever else
    Jinja put in the parent scope.
    """

    def resolve_or_missing(self, key: str) -> Any:
        if key in self.vars:
            return self.vars[key]
        binding = self.parent.get(BINDING_VAR)
        if binding is not None and key in binding:
            return binding[key]
        if key in self.parent:
            return self.parent[key]
        return missing


class TemplatorEnvironment(Environment):
    context_class = BindingContext


def finalize(value: Any) -> Any:
    """Print None as empty text, matching how absent optional data should look."""
    return "" if value is None else value


def create_environment() -> Environment:
    """Build the template environment.

    Control-only lines (``{% if %}``, ``{% for %}``...) leave no blank
    line behind, a trailing newline survives rendering, and a name the
    context cannot answer is an error rather than silent empty text.
    """
    return TemplatorEnvironment(
        loader=BaseLoader(),
        extensions=[StandaloneTagExtension],
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        finalize=finalize,
    )


ENVIRONMENT = create_environment()
