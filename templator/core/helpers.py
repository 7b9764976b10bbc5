"""Helpers exposed by name to every template."""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from templator.core.logger import get_logger

logger = get_logger(__name__)

ERROR_PLACEHOLDER = "Error (See Logs)"
NULL_LITERAL = "null"


@dataclass(frozen=True)
class Outcome:
    """Result of a guarded computation: a value or the error that replaced it."""

    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome":
        return cls(error=error)


def guard(func: Callable[..., Any], *args, **kwargs) -> Outcome:
    """Run func and capture either its return value or the exception it raised."""
    try:
        return Outcome.success(func(*args, **kwargs))
    except Exception as exc:
        return Outcome.failure(exc)


def nil_to_null(value: Any) -> Any:
    """Render None as the literal ``null``, pass anything else through.

    Example:
        gateway: {{ nil_to_null(gateway) }}
    """
    return NULL_LITERAL if value is None else value


def catch_error(func: Optional[Callable[..., Any]] = None, *args, caller=None, **kwargs) -> Any:
    """Evaluate a block of template logic, replacing any failure with a placeholder.

    The block is either the body of a call block or a callable plus its
    arguments:

        {% call catch_error() %}{{ node.lookup_ip() }}{% endcall %}
        {{ catch_error(node.lookup_ip) }}

    A failure is logged once and rendered as ``Error (See Logs)``.
    """
    block = caller if func is None else func
    if block is None:
        raise TypeError("catch_error() needs a call block or a callable")

    outcome = guard(block, *args, **kwargs)
    if outcome.ok:
        return outcome.value

    logger.error(
        f"Template block failed: {type(outcome.error).__name__}: {outcome.error}",
        exc_info=outcome.error,
    )
    return ERROR_PLACEHOLDER


HELPERS = {
    "nil_to_null": nil_to_null,
    "catch_error": catch_error,
}
