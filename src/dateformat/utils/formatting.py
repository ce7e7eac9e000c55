"""Pure padding utilities for fixed-width token output.

This module provides stateless helpers used by the token table to render
numbers at a fixed width. All functions are pure with no side effects.
"""

import math

_DEFAULT_WIDTH = 2


def stringify(value: object) -> str:
    """Convert a token value to its display string.

    Integral floats render without a fractional part so that token functions
    doing float arithmetic still produce "15" rather than "15.0".

    Examples:
        >>> stringify(15)
        '15'
        >>> stringify(15.0)
        '15'
        >>> stringify("Monday")
        'Monday'
    """
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def pad(value: object, pad_char: object, width: int = _DEFAULT_WIDTH) -> str:
    """Left-pad a value with a padding string up to the given width.

    Args:
        value: Value to pad (converted with ``stringify``)
        pad_char: Padding string, repeated once per missing position.
            Numbers are accepted so ``pad(5, 0)`` reads like the token table uses it.
        width: Target width (default: 2)

    Returns:
        The padded string, or the value unchanged when already wide enough

    Examples:
        >>> pad(5, 0)
        '05'
        >>> pad(5, "0", 3)
        '005'
        >>> pad(123, 0)
        '123'
    """
    text = stringify(value)
    missing = width - len(text)
    if missing <= 0:
        return text
    return stringify(pad_char) * missing + text


def rpad(value: object, pad_char: object, width: int = _DEFAULT_WIDTH) -> str:
    """Right-pad a value with a padding string up to the given width.

    Examples:
        >>> rpad(5, 0)
        '50'
        >>> rpad("+5", 0, 4)
        '+500'
    """
    text = stringify(value)
    missing = width - len(text)
    if missing <= 0:
        return text
    return text + stringify(pad_char) * missing
