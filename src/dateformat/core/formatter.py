"""Template formatter: expands token characters in a format string.

The format string is scanned left to right. Characters between ``{`` and
``}`` are copied literally and the braces themselves are dropped. Spaces are
always literal. Any other character is replaced with its token value when a
token is registered for it, and copied literally otherwise.

Malformed templates never raise: an unmatched ``{`` leaves the rest of the
string literal and unknown characters pass through unchanged.
"""

from dateformat.types.aliases import TokenMapping
from dateformat.types.instant import Instant
from dateformat.utils.formatting import stringify

ESCAPE_OPEN = "{"
ESCAPE_CLOSE = "}"


def format_date(instant: Instant, template: str | None, tokens: TokenMapping) -> str:
    """Render an instant with a token template.

    Args:
        instant: Instant whose fields the tokens read
        template: Format string; None is treated as empty
        tokens: Effective token table, read but never modified

    Returns:
        The rendered string

    Raises:
        InvalidInstantError: If a token needs civil fields of an invalid instant
        Exception: Whatever a registered token function raises, unchanged

    Example:
        >>> from dateformat.core.tokens import build_default_tokens
        >>> format_date(Instant.from_civil(2024, 1, 15), "{Day} d", build_default_tokens())
        'Day 15'
    """
    if not template:
        return ""

    parts: list[str] = []
    literal = False

    for character in template:
        if character == " ":
            parts.append(character)
        elif character == ESCAPE_OPEN:
            literal = True
        elif character == ESCAPE_CLOSE:
            literal = False
        elif literal:
            parts.append(character)
        else:
            func = tokens.get(character)
            parts.append(character if func is None else stringify(func(instant)))

    return "".join(parts)
