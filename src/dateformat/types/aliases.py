"""Type aliases using modern PEP 695 syntax.

This module defines the callable shapes shared by the token table, the
formatter and the relative-time engines.
"""

from collections.abc import Callable, Mapping

from dateformat.types.instant import Instant

# Value produced by a token function; the formatter stringifies it
type TokenValue = int | float | str | Instant

# Formatting function bound to a single token character
type TokenFunc = Callable[[Instant], TokenValue]

# Read-only view of an effective token table
type TokenMapping = Mapping[str, TokenFunc]

# Applies whatever function the effective table currently holds for a token
type TokenResolver = Callable[[str, Instant], TokenValue]

# Source of the current time, injected for deterministic relative formatting
type Clock = Callable[[], Instant]
