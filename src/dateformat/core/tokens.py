"""Token table: single-character tokens mapped to formatting functions.

Each token is a pure function of an ``Instant`` returning a number or a
string. The builtin set covers calendar fields (Y, m, d, ...), clock fields
(H, i, s, ...), UTC offsets (O, P, Z), composite forms (c, r, U) and the
delta tokens (V/v, K/k, X/x, p/C, E/e) meant for duration-instants built from
an elapsed millisecond count.

A ``TokenTable`` holds the builtin set plus caller registrations. Lookups
check registrations first, so a registered token overrides the builtin one.
Composite builtins (padded twins, ``A``, ``P``, ``c``, ``L``, ``t``, ``z``,
``W``) read their parts through the table at call time, so overriding ``g``
also changes ``h`` and overriding ``Y`` also changes ``c`` and ``L``.
"""

import logging
import math
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from dateformat.core.config import NameTables
from dateformat.types.aliases import TokenFunc, TokenMapping, TokenResolver, TokenValue
from dateformat.types.instant import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    Instant,
    InvalidInstantError,
)
from dateformat.utils.formatting import pad, stringify

logger = logging.getLogger(__name__)

# Days in each month, February overridden to 29 in leap years
DAYS_IN_MONTH: Final[tuple[int, ...]] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Characters the formatter consumes itself; they can never resolve as tokens
RESERVED_CHARACTERS: Final[frozenset[str]] = frozenset({"{", "}", " "})


class TokenRegistrationError(ValueError):
    """Raised when a token registration is malformed."""

    pass


class UnknownTokenError(KeyError):
    """Raised when a value is requested for a token that is not registered."""

    pass


def _require_valid(instant: Instant) -> None:
    if not instant.is_valid:
        raise InvalidInstantError("Instant has no valid time value")


def _as_int(token: str, value: TokenValue) -> int:
    """Read a resolved part as an integer; "5", 5.0 and 5 all give 5."""
    if isinstance(value, Instant):
        msg = f"Token {token!r} must produce a number, got: Instant"
        raise TypeError(msg)
    return int(value)


# ------------------------------
# Delta tokens
# ------------------------------


def _mod_calc(instant: Instant, divisor: int, modulus: int) -> int:
    """Whole seconds of the instant, floor-divided by divisor, modulo modulus."""
    _require_valid(instant)
    return int(instant.epoch_ms // MS_PER_SECOND) // divisor % modulus


def _days_elapsed(instant: Instant) -> int:
    # Wraps at 100000 days (about 273 years)
    return _mod_calc(instant, 86_400, 100_000)


def _hours_elapsed(instant: Instant) -> int:
    return _mod_calc(instant, 3_600, 24)


def _minutes_elapsed(instant: Instant) -> int:
    return _mod_calc(instant, 60, 60)


# ------------------------------
# Calendar and clock fields
# ------------------------------


def _short_year(instant: Instant) -> str:
    return str(instant.year)[-2:]


def _iso_weekday(instant: Instant) -> int:
    return instant.weekday or 7


def _meridiem(instant: Instant) -> str:
    return "am" if instant.hour < 12 else "pm"


def _hour_12(instant: Instant) -> int:
    return instant.hour % 12 or 12


def _swatch(instant: Instant) -> str:
    ms_of_day = instant.hour * MS_PER_HOUR + instant.minute * MS_PER_MINUTE + instant.second * MS_PER_SECOND
    return pad(ms_of_day // 86_400, 0, 3)


def _offset(instant: Instant) -> str:
    offset = instant.offset_minutes
    sign = "+" if offset >= 0 else "-"
    hours, minutes = divmod(abs(offset), 60)
    return f"{sign}{pad(hours, 0)}{pad(minutes, 0)}"


def _offset_seconds(instant: Instant) -> int:
    return instant.offset_minutes * 60


def _epoch_ms(instant: Instant) -> int:
    _require_valid(instant)
    return int(instant.epoch_ms)


def build_default_tokens(
    names: NameTables | None = None,
    resolve: TokenResolver | None = None,
) -> dict[str, TokenFunc]:
    """Build the builtin token set.

    Args:
        names: Month/day name tables and ordinal suffixes (default: English)
        resolve: Applies the current function for a token; composite tokens
            read their parts through it. Defaults to the returned mapping
            itself, so composites then only see builtin parts.

    Returns:
        Fresh mapping of token character to formatting function

    Example:
        >>> tokens = build_default_tokens()
        >>> tokens["c"](Instant.from_civil(2024, 1, 15, 3, 4, 5))
        '2024-01-15T03:04:05+00:00'
    """
    names = names or NameTables()
    months = names.months
    days = names.days
    suffixes = dict(names.suffixes)
    default_suffix = names.default_suffix

    table: dict[str, TokenFunc] = {}

    def own_part(token: str, instant: Instant) -> TokenValue:
        return table[token](instant)

    part = resolve or own_part

    def number(token: str, instant: Instant) -> int:
        return _as_int(token, part(token, instant))

    def text(token: str, instant: Instant) -> str:
        return stringify(part(token, instant))

    def year_start(instant: Instant) -> Instant:
        value = part("f", instant)
        if not isinstance(value, Instant):
            msg = f"Token 'f' must produce an Instant, got: {type(value).__name__}"
            raise TypeError(msg)
        return value

    def day_fraction_of_year(instant: Instant) -> float:
        return (instant - year_start(instant)) / MS_PER_DAY

    def day_of_year(instant: Instant) -> int:
        # Rounds half up, so from local noon onwards this reads as the next day
        return math.floor(day_fraction_of_year(instant) + 0.5)

    def week_of_year(instant: Instant) -> int:
        return math.ceil((day_fraction_of_year(instant) + number("w", year_start(instant))) / 7)

    def is_leap_year(instant: Instant) -> int:
        year = number("Y", instant)
        return 1 if year % 4 == 0 and (year % 100 != 0 or year % 400 == 0) else 0

    def days_in_month(instant: Instant) -> int:
        if instant.month == 1 and number("L", instant) == 1:
            return 29
        return DAYS_IN_MONTH[instant.month]

    def offset_colon(instant: Instant) -> str:
        offset = text("O", instant)
        return f"{offset[:3]}:{offset[3:]}"

    def iso_8601(instant: Instant) -> str:
        return (
            f"{text('Y', instant)}-{text('m', instant)}-{text('d', instant)}"
            f"T{text('H', instant)}:{text('i', instant)}:{text('s', instant)}"
            f"{text('P', instant)}"
        )

    table.update(
        {
            # Delta
            "V": _days_elapsed,
            "v": lambda instant: pad(part("V", instant), 0),
            "K": lambda instant: number("V", instant) % 365,
            "k": lambda instant: pad(part("K", instant), 0),
            "X": _hours_elapsed,
            "x": lambda instant: pad(part("X", instant), 0),
            "p": _minutes_elapsed,
            "C": lambda instant: pad(part("p", instant), 0),
            "E": lambda instant: number("X", instant) * 60 + number("p", instant),
            "e": lambda instant: pad(part("E", instant), 0),
            # Day
            "d": lambda instant: pad(instant.day, 0),
            "D": lambda instant: days[instant.weekday][:3],
            "j": lambda instant: instant.day,
            "l": lambda instant: days[instant.weekday],
            "N": _iso_weekday,
            "S": lambda instant: suffixes.get(instant.day, default_suffix),
            "w": lambda instant: instant.weekday,
            "z": day_of_year,
            # Week
            "W": week_of_year,
            # Month
            "F": lambda instant: months[instant.month],
            "m": lambda instant: pad(instant.month + 1, 0),
            "M": lambda instant: months[instant.month][:3],
            "n": lambda instant: instant.month + 1,
            "t": days_in_month,
            # Year
            "L": is_leap_year,
            "f": lambda instant: instant.year_start(),
            "Y": lambda instant: instant.year,
            "y": _short_year,
            # Time
            "a": _meridiem,
            "A": lambda instant: text("a", instant).upper(),
            "B": _swatch,
            "g": _hour_12,
            "G": lambda instant: instant.hour,
            "h": lambda instant: pad(part("g", instant), 0),
            "H": lambda instant: pad(instant.hour, 0),
            "i": lambda instant: pad(instant.minute, 0),
            "s": lambda instant: pad(instant.second, 0),
            "u": lambda instant: instant.millisecond,
            # Timezone
            "O": _offset,
            "P": offset_colon,
            "Z": _offset_seconds,
            # Full date/time
            "c": iso_8601,
            "r": str,
            "U": _epoch_ms,
        }
    )
    return table


def _validate_registration(token: object, func: object) -> None:
    if not isinstance(token, str) or len(token) != 1:
        msg = f"Token must be a single character, got: {token!r}"
        raise TokenRegistrationError(msg)
    if token in RESERVED_CHARACTERS:
        msg = f"Token {token!r} is reserved by the formatter and can never resolve"
        raise TokenRegistrationError(msg)
    if not callable(func):
        msg = f"Token {token!r} must map to a callable, got: {type(func).__name__}"
        raise TokenRegistrationError(msg)


class TokenTable:
    """Builtin tokens plus caller registrations, safe for concurrent readers.

    The effective table is rebuilt on every registration and swapped in as a
    whole (copy-on-write). Readers take the current mapping without locking;
    writers serialize on a lock. Registrations are never removed.

    Composite builtins resolve their parts against the current effective
    table when they run, not against the snapshot they were looked up from.
    """

    def __init__(
        self,
        names: NameTables | None = None,
        overrides: Mapping[str, TokenFunc] | None = None,
    ) -> None:
        self._custom: dict[str, TokenFunc] = {}
        self._lock = threading.Lock()
        self._builtin: Final[Mapping[str, TokenFunc]] = MappingProxyType(
            build_default_tokens(names, self._apply_current)
        )
        self._effective: TokenMapping = self._builtin
        if overrides:
            _ = self.register_many(overrides)

    def _apply_current(self, token: str, instant: Instant) -> TokenValue:
        return self._effective[token](instant)

    def register(self, token: str, func: TokenFunc) -> TokenMapping:
        """Register or override a single token.

        Args:
            token: Single character that is not a brace or space
            func: Function of an Instant returning a number or string

        Returns:
            Read-only view of the effective table after registration

        Raises:
            TokenRegistrationError: If token or func is malformed
        """
        return self.register_many({token: func})

    def register_many(self, tokens: Mapping[str, TokenFunc]) -> TokenMapping:
        """Register or override several tokens at once.

        Validation happens before anything is applied, so a malformed entry
        leaves the table untouched.

        Raises:
            TokenRegistrationError: If any entry is malformed
        """
        for token, func in tokens.items():
            _validate_registration(token, func)

        with self._lock:
            self._custom.update(tokens)
            self._effective = MappingProxyType({**self._builtin, **self._custom})
            effective = self._effective

        logger.debug(
            "Registered tokens",
            extra={
                "tokens": sorted(tokens),
                "overridden": sorted(token for token in tokens if token in self._builtin),
            },
        )
        return effective

    def snapshot(self) -> TokenMapping:
        """Return a read-only view of the current effective table."""
        return self._effective

    def has(self, token: str) -> bool:
        return token in self._effective

    def resolve(self, token: str, instant: Instant) -> TokenValue:
        """Compute the raw value of a token for an instant.

        Exceptions raised by a registered token function propagate unchanged.

        Raises:
            UnknownTokenError: If the token is not registered
            InvalidInstantError: If the instant is invalid and the token needs its time value
        """
        func = self._effective.get(token)
        if func is None:
            raise UnknownTokenError(token)
        return func(instant)

    def __contains__(self, token: object) -> bool:
        return token in self._effective

    def __len__(self) -> int:
        return len(self._effective)
