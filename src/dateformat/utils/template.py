"""Label template system for percent-marker substitution.

Relative-time labels are plain strings carrying ``%x`` markers:

- ``%t``: a magnitude (number of years, minutes, ...)
- ``%d``: the formatted date
- ``%r``: the joined list of relative fragments

Templates are validated at load time so that a label only uses the markers
its engine substitutes. Substitution is plain string replacement and never
evaluates the template.
"""

import re
from collections.abc import Mapping, Set
from typing import Final

# Known placeholders that can be used in labels
KNOWN_PLACEHOLDERS: Final[Set[str]] = frozenset({"t", "d", "r"})

# Matches %x markers (a single lowercase letter after the percent sign)
PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"%([a-z])")


class TemplateError(ValueError):
    """Raised when label validation fails."""

    pass


def identify_placeholders(template: str) -> Set[str]:
    """Identify all placeholder markers in a label.

    Args:
        template: Label string potentially containing %x markers

    Returns:
        Set of marker letters found in the label (without the percent sign)

    Example:
        >>> sorted(identify_placeholders("%d (%r since)"))
        ['d', 'r']
    """
    return frozenset(PLACEHOLDER_PATTERN.findall(template))


def validate_template(template: str, allowed: Set[str] = KNOWN_PLACEHOLDERS) -> None:
    """Validate that a label only uses allowed placeholders.

    Args:
        template: Label string to validate
        allowed: Marker letters the label may use

    Raises:
        TemplateError: If the label contains markers outside ``allowed``

    Example:
        >>> validate_template("%t minutes ago", {"t"})  # OK
        >>> validate_template("%d ago", {"t"})  # Raises TemplateError
    """
    unknown = identify_placeholders(template) - allowed

    if unknown:
        unknown_list = sorted(f"%{name}" for name in unknown)
        allowed_list = sorted(f"%{name}" for name in allowed)
        msg = (
            f"Label contains unsupported placeholders: {unknown_list}. "
            f"Supported placeholders are: {allowed_list}"
        )
        raise TemplateError(msg)


def replace_placeholders(
    template: str,
    values: Mapping[str, object],
    *,
    first_only: bool = False,
) -> str:
    """Replace placeholder markers in a label with provided values.

    Values are substituted in mapping order. Markers without a value are left
    in place, and values without a marker are ignored.

    Args:
        template: Label string with %x markers
        values: Mapping of marker letters to replacement values
        first_only: Replace only the first occurrence of each marker

    Returns:
        Label with markers replaced by their values

    Example:
        >>> replace_placeholders("%t seconds ago", {"t": 5})
        '5 seconds ago'
        >>> replace_placeholders("%t and %t", {"t": 1}, first_only=True)
        '1 and %t'
    """
    count = 1 if first_only else -1
    result = template
    for name, value in values.items():
        result = result.replace(f"%{name}", str(value), count)
    return result
