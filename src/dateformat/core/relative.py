"""Relative-time engines.

Two independent descriptions of how far an instant lies from "now":

- ``relative_verbose``: a years/months/days breakdown wrapped around the
  formatted date, e.g. "2024-01-15 (1 year 1 month 5 days since)".
- ``relative_short``: a banded phrase for past instants, e.g.
  "5 minutes ago". Bands are evaluated in order and the first match wins.

Both read labels from a label set and never raise for invalid instants;
those map to the ``never`` label.
"""

import logging
import math
from dataclasses import dataclass
from typing import Final

from dateformat.core.config import ShortLabels, VerboseLabels
from dateformat.core.formatter import format_date
from dateformat.core.tokens import TokenTable
from dateformat.types.instant import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE, MS_PER_SECOND, Instant
from dateformat.utils.template import replace_placeholders

logger = logging.getLogger(__name__)

# Calendar approximations used by the verbose breakdown
DAYS_PER_YEAR: Final[int] = 365
DAYS_PER_MONTH: Final[int] = 30


@dataclass(slots=True, frozen=True)
class Band:
    """Short-phrase band chosen for a time difference.

    ``label`` names a ShortLabels entry; ``magnitude`` is substituted for
    ``%t`` when the band carries one.
    """

    label: str
    magnitude: int | None = None


def classify_difference(difference_ms: float) -> Band:
    """Select the short-phrase band for ``now - instant`` in milliseconds.

    Example:
        >>> classify_difference(90_000)
        Band(label='minute', magnitude=None)
        >>> classify_difference(2_000)
        Band(label='seconds', magnitude=2)
    """
    if math.isnan(difference_ms) or difference_ms < 0:
        return Band("never")
    if difference_ms < 2 * MS_PER_SECOND:
        return Band("now")
    if difference_ms < MS_PER_MINUTE:
        return Band("seconds", math.floor(difference_ms / MS_PER_SECOND))
    if difference_ms < 2 * MS_PER_MINUTE:
        return Band("minute")
    if difference_ms < MS_PER_HOUR:
        return Band("minutes", math.floor(difference_ms / MS_PER_MINUTE))
    if difference_ms < 2 * MS_PER_HOUR:
        return Band("hour")
    if difference_ms < MS_PER_DAY:
        return Band("hours", math.floor(difference_ms / MS_PER_HOUR))
    # Exactly one day is not "yesterday"; it falls through to the days band
    if MS_PER_DAY < difference_ms < 2 * MS_PER_DAY:
        return Band("yesterday")
    if difference_ms < DAYS_PER_YEAR * MS_PER_DAY:
        return Band("days", math.floor(difference_ms / MS_PER_DAY))
    return Band("years")


def relative_short(instant: Instant, *, now: Instant, labels: ShortLabels) -> str:
    """Describe a past instant with a short banded phrase.

    Future instants and invalid instants yield the ``never`` label.

    Args:
        instant: Instant to describe
        now: Current time
        labels: Short label set

    Returns:
        The selected label with every ``%t`` replaced by the band magnitude
    """
    band = classify_difference(now.epoch_ms - instant.epoch_ms)
    label: str = getattr(labels, band.label)
    if band.magnitude is None:
        return label
    return replace_placeholders(label, {"t": band.magnitude})


def relative_verbose(
    instant: Instant,
    *,
    now: Instant,
    labels: VerboseLabels,
    tokens: TokenTable,
    template: str | None = None,
) -> str:
    """Describe an instant as a years/months/days distance from now.

    The elapsed days come from rendering the ``V`` delta token for a
    duration-instant. A registered ``V`` is used too, and the builtin one
    wraps distances beyond 100000 days.

    Args:
        instant: Instant to describe
        now: Current time
        labels: Verbose label set
        tokens: Token table used to render ``%d`` and count elapsed days
        template: Format string for ``%d`` (None renders an empty date)

    Returns:
        The since/until/today label with ``%d`` and ``%r`` substituted,
        or the ``never`` label for invalid instants
    """
    if not (instant.is_valid and now.is_valid):
        return labels.never

    if now.epoch_ms > instant.epoch_ms:
        display_label = labels.since
    else:
        display_label = labels.until

    table = tokens.snapshot()
    days = int(format_date(Instant.duration(now - instant), "V", table))

    relative: list[str] = []
    years = 0
    months = 0

    if days > DAYS_PER_YEAR:
        years, days = divmod(days, DAYS_PER_YEAR)
        if years == 1:
            relative.append(labels.year)
        else:
            relative.append(replace_placeholders(labels.years, {"t": years}, first_only=True))

    if days > DAYS_PER_MONTH:
        months, days = divmod(days, DAYS_PER_MONTH)
        if months == 1:
            relative.append(labels.month)
        else:
            relative.append(replace_placeholders(labels.months, {"t": months}, first_only=True))

    if days == 1:
        relative.append(labels.day)
    elif days > 0:
        relative.append(replace_placeholders(labels.days, {"t": days}, first_only=True))

    if days == 0 and months == 0 and years == 0:
        display_label = labels.today

    logger.debug(
        "Computed relative breakdown",
        extra={"years": years, "months": months, "days": days},
    )

    return replace_placeholders(
        display_label,
        {"d": format_date(instant, template, table), "r": " ".join(relative)},
        first_only=True,
    )
