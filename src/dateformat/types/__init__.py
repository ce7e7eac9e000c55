"""Type definitions for dateformat.

This package provides:
- The immutable ``Instant`` value type
- Type aliases (PEP 695 modern syntax) for token functions and clocks
"""

from dateformat.types.aliases import (
    Clock,
    TokenFunc,
    TokenMapping,
    TokenResolver,
    TokenValue,
)
from dateformat.types.instant import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    Instant,
    InvalidInstantError,
    coerce_instant,
)

__all__ = [
    # Type aliases
    "Clock",
    "TokenFunc",
    "TokenMapping",
    "TokenResolver",
    "TokenValue",
    # Instant
    "MS_PER_DAY",
    "MS_PER_HOUR",
    "MS_PER_MINUTE",
    "MS_PER_SECOND",
    "Instant",
    "InvalidInstantError",
    "coerce_instant",
]
