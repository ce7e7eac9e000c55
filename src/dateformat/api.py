"""Module-level API bound to a process-wide default engine.

These functions mirror the ``DateFormatter`` methods. Registrations and
label updates made here are visible to every later call in the process.
Use a dedicated ``DateFormatter`` for isolated configuration.
"""

from collections.abc import Mapping

from dateformat.core.config import ShortLabels, VerboseLabels
from dateformat.core.engine import DateFormatter
from dateformat.types.aliases import TokenFunc, TokenMapping, TokenValue

_default_engine = DateFormatter()


def get_default_engine() -> DateFormatter:
    return _default_engine


def register_token(token: str, func: TokenFunc) -> TokenMapping:
    """Register or override a token on the default engine.

    Returns:
        Read-only view of the effective token table
    """
    return _default_engine.register_token(token, func)


def register_tokens(tokens: Mapping[str, TokenFunc]) -> TokenMapping:
    """Register or override several tokens on the default engine."""
    return _default_engine.register_tokens(tokens)


def tokens() -> TokenMapping:
    return _default_engine.tokens.snapshot()


def has_token(token: str) -> bool:
    return _default_engine.has_token(token)


def get_token_value(token: str, instant: object = None) -> TokenValue:
    """Compute one token's value, defaulting to the current time."""
    return _default_engine.get_token_value(token, instant)


def format_date(instant: object, template: str | None = None) -> str:
    """Render an instant with a token template.

    Example:
        >>> from dateformat import Instant
        >>> format_date(Instant.from_civil(2024, 1, 15, 3, 4, 5), "{literal text} Y-m-d")
        'literal text 2024-01-15'
    """
    return _default_engine.format(instant, template)


def relative_verbose(instant: object, template: str | None = None) -> str:
    return _default_engine.relative_verbose(instant, template)


def relative_short(instant: object) -> str:
    return _default_engine.relative_short(instant)


def update_verbose_labels(**overrides: str) -> VerboseLabels:
    return _default_engine.update_verbose_labels(**overrides)


def update_short_labels(**overrides: str) -> ShortLabels:
    return _default_engine.update_short_labels(**overrides)
