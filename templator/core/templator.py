"""Render templates against node, group and cluster data."""
from typing import Any, Optional

from jinja2 import Template, TemplateSyntaxError

from templator.core.binding import Binding
from templator.core.config import get_config
from templator.core.context import ContextSource, wrap_context
from templator.core.data import format_markdown, load_data
from templator.core.editor import Editor
from templator.core.environment import BINDING_VAR, ENVIRONMENT
from templator.core.errors import TemplateRenderError
from templator.core.helpers import HELPERS
from templator.core.logger import get_logger

logger = get_logger(__name__)

TEMPLATE_FILENAME = "<template>"


def _template_lineno(error: BaseException) -> Optional[int]:
    """Return the innermost template line found in error's traceback."""
    lineno = None
    tb = error.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == TEMPLATE_FILENAME:
            lineno = tb.tb_lineno
        tb = tb.tb_next
    return lineno


class Templator:
    """Renders template text against one context.

    The binding is built once at construction and reused for every call.

    Example:
        >>> Templator({"name": "node01"}).render("host {{ name }}\\n")
        'host node01\\n'
    """

    environment = ENVIRONMENT

    def __init__(self, context: Any = None, editor: Optional[Editor] = None):
        """Initialize templator.

        Args:
            context: Object or mapping templates read from. None renders
                every name as absent.
            editor: Editor used by edit() (default: configured editor)
        """
        self._context = wrap_context(context)
        self._binding = Binding(self._context, HELPERS, defaults=self.environment.globals)
        self._editor = editor

    @property
    def context(self) -> ContextSource:
        return self._context

    @property
    def binding(self) -> Binding:
        return self._binding

    @property
    def editor(self) -> Editor:
        if self._editor is None:
            self._editor = Editor()
        return self._editor

    def compile(self, text: str) -> Template:
        """Compile text, raising TemplateRenderError on syntax errors."""
        try:
            return self.environment.from_string(text)
        except TemplateSyntaxError as e:
            raise TemplateRenderError(f"Template syntax error: {e.message}", e.lineno) from e

    def render(self, text: str) -> str:
        """Render text against the binding.

        Raises:
            TemplateRenderError: Malformed template or an unguarded failing expression
        """
        template = self.compile(text)
        try:
            return template.render({BINDING_VAR: self._binding})
        except Exception as e:
            logger.debug(f"Render failed: {type(e).__name__}: {e}")
            raise TemplateRenderError(
                f"Template rendering failed: {type(e).__name__}: {e}",
                _template_lineno(e),
            ) from e

    def edit(self, text: str) -> str:
        """Render text, open it in the editor and return what the user saved."""
        return self.editor.edit(self.render(text))

    def yaml(self, text: str) -> Any:
        """Render text and parse it as safe YAML with interned keys."""
        return load_data(self.render(text))

    def edit_yaml(self, text: str) -> Any:
        """Render text, let the user edit it, then parse the result as safe YAML."""
        return load_data(self.edit(text))

    def markdown(self, text: str) -> str:
        """Render text and format it as Markdown for the terminal."""
        config = get_config()
        return format_markdown(
            self.render(text),
            width=config.markdown_width,
            color=config.markdown_color,
        )
