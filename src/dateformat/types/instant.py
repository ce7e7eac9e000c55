"""Immutable point in civil time with a fixed UTC offset.

An ``Instant`` stores milliseconds since the Unix epoch plus an offset in
minutes east of UTC. Civil fields (year, month, weekday, ...) are derived on
access from the local wall-clock time ``epoch_ms + offset``. Arithmetic
returns new instants; nothing mutates in place.

Month and weekday follow the token table conventions: ``month`` is 0-based
(January is 0) and ``weekday`` counts from Sunday (Sunday is 0).
"""

import math
import time
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone
from typing import Final, Self

MS_PER_SECOND: Final[int] = 1_000
MS_PER_MINUTE: Final[int] = 60 * MS_PER_SECOND
MS_PER_HOUR: Final[int] = 60 * MS_PER_MINUTE
MS_PER_DAY: Final[int] = 24 * MS_PER_HOUR

_EPOCH: Final[datetime] = datetime(1970, 1, 1)


class InvalidInstantError(ValueError):
    """Raised when civil fields are requested from an invalid (NaN) instant."""

    pass


@dataclass(slots=True, frozen=True)
class Instant:
    """A point in time with millisecond resolution and a fixed UTC offset."""

    epoch_ms: float
    offset_minutes: int = 0

    @classmethod
    def from_epoch_ms(cls, epoch_ms: float, offset_minutes: int = 0) -> Self:
        return cls(epoch_ms, offset_minutes)

    @classmethod
    def from_civil(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        *,
        offset_minutes: int = 0,
    ) -> Self:
        """Build an instant from local wall-clock fields.

        ``month`` is the calendar month 1-12, as with ``datetime``.

        Example:
            >>> Instant.from_civil(2024, 1, 15, 3, 4, 5).month
            0
        """
        local = datetime(year, month, day, hour, minute, second, millisecond * 1000)
        local_ms = (local - _EPOCH) // timedelta(milliseconds=1)
        return cls(local_ms - offset_minutes * MS_PER_MINUTE, offset_minutes)

    @classmethod
    def from_datetime(cls, value: datetime) -> Self:
        """Build an instant from a datetime.

        Aware datetimes keep their UTC offset (rounded to whole minutes).
        Naive datetimes are taken as UTC.
        """
        aware = value if value.tzinfo is not None else value.replace(tzinfo=UTC)
        offset = aware.utcoffset() or timedelta(0)
        epoch_ms = (aware - _EPOCH.replace(tzinfo=UTC)) // timedelta(milliseconds=1)
        return cls(epoch_ms, round(offset / timedelta(minutes=1)))

    @classmethod
    def now(cls, offset_minutes: int = 0) -> Self:
        return cls(time.time_ns() // 1_000_000, offset_minutes)

    @classmethod
    def duration(cls, elapsed_ms: float) -> Self:
        """Build a duration-instant from an elapsed millisecond count.

        Duration-instants exist so the delta tokens (V, K, X, p, E and their
        padded twins) can extract magnitudes from a time difference.
        """
        return cls(abs(elapsed_ms), 0)

    @classmethod
    def invalid(cls) -> Self:
        return cls(math.nan, 0)

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.epoch_ms)

    def _local(self) -> datetime:
        if not self.is_valid:
            raise InvalidInstantError("Instant has no valid time value")
        return _EPOCH + timedelta(milliseconds=self.epoch_ms + self.offset_minutes * MS_PER_MINUTE)

    @property
    def year(self) -> int:
        return self._local().year

    @property
    def month(self) -> int:
        return self._local().month - 1

    @property
    def day(self) -> int:
        return self._local().day

    @property
    def weekday(self) -> int:
        # isoweekday: Monday=1 .. Sunday=7
        return self._local().isoweekday() % 7

    @property
    def hour(self) -> int:
        return self._local().hour

    @property
    def minute(self) -> int:
        return self._local().minute

    @property
    def second(self) -> int:
        return self._local().second

    @property
    def millisecond(self) -> int:
        return self._local().microsecond // 1000

    def year_start(self) -> Self:
        """Local midnight on 1 January of this instant's year, same offset."""
        return type(self).from_civil(self.year, 1, 1, offset_minutes=self.offset_minutes)

    def shift(self, milliseconds: float) -> Self:
        return type(self)(self.epoch_ms + milliseconds, self.offset_minutes)

    def to_datetime(self) -> datetime:
        """Return an aware datetime carrying this instant's offset."""
        tz = timezone(timedelta(minutes=self.offset_minutes))
        return self._local().replace(tzinfo=tz)

    def __sub__(self, other: "Instant") -> float:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.epoch_ms - other.epoch_ms

    def __str__(self) -> str:
        if not self.is_valid:
            return "Invalid Instant"
        return str(self.to_datetime())


def coerce_instant(value: object) -> Instant:
    """Accept an Instant, a datetime or epoch milliseconds.

    Raises:
        TypeError: For any other type (booleans included)
    """
    if isinstance(value, Instant):
        return value
    if isinstance(value, datetime):
        return Instant.from_datetime(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Instant.from_epoch_ms(value)
    msg = f"Expected Instant, datetime or epoch milliseconds, got: {type(value).__name__}"
    raise TypeError(msg)
