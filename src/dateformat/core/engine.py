"""Formatting engine owning a token table, label sets and a clock.

``DateFormatter`` is the explicit configuration object behind the public
API: it holds its own token table and label sets, so independent engines
never see each other's registrations. The module-level functions in
``dateformat.api`` delegate to a process-wide default instance.
"""

import logging
import threading
from collections.abc import Mapping

from dateformat.core.config import MainConfig, NameTables, ShortLabels, VerboseLabels
from dateformat.core.formatter import format_date
from dateformat.core.relative import relative_short, relative_verbose
from dateformat.core.tokens import TokenTable
from dateformat.types.aliases import Clock, TokenFunc, TokenMapping, TokenValue
from dateformat.types.instant import Instant, coerce_instant

logger = logging.getLogger(__name__)


class DateFormatter:
    """Token formatter and relative-time engines sharing one configuration.

    Args:
        names: Month/day name tables for the builtin tokens
        verbose_labels: Labels for ``relative_verbose``
        short_labels: Labels for ``relative_short``
        clock: Source of the current time (default: ``Instant.now``)
        tokens: Token table to use instead of a fresh builtin one

    Example:
        >>> engine = DateFormatter(clock=lambda: Instant.from_civil(2024, 1, 15))
        >>> engine.format(Instant.from_civil(2024, 1, 15), "l, F jS")
        'Monday, January 15th'
    """

    def __init__(
        self,
        *,
        names: NameTables | None = None,
        verbose_labels: VerboseLabels | None = None,
        short_labels: ShortLabels | None = None,
        clock: Clock | None = None,
        tokens: TokenTable | None = None,
    ) -> None:
        self._tokens: TokenTable = tokens if tokens is not None else TokenTable(names)
        self._verbose_labels: VerboseLabels = verbose_labels or VerboseLabels()
        self._short_labels: ShortLabels = short_labels or ShortLabels()
        self._clock: Clock = clock or Instant.now
        self._labels_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: MainConfig, *, clock: Clock | None = None) -> "DateFormatter":
        """Build an engine from a loaded configuration."""
        return cls(
            names=config.names,
            verbose_labels=config.labels.verbose,
            short_labels=config.labels.short,
            clock=clock,
        )

    # ------------------------------
    # Tokens
    # ------------------------------

    @property
    def tokens(self) -> TokenTable:
        return self._tokens

    def register_token(self, token: str, func: TokenFunc) -> TokenMapping:
        return self._tokens.register(token, func)

    def register_tokens(self, tokens: Mapping[str, TokenFunc]) -> TokenMapping:
        return self._tokens.register_many(tokens)

    def has_token(self, token: str) -> bool:
        return self._tokens.has(token)

    def get_token_value(self, token: str, instant: object = None) -> TokenValue:
        """Compute the raw value of one token, defaulting to the current time.

        Raises:
            UnknownTokenError: If the token is not registered
        """
        target = self._clock() if instant is None else coerce_instant(instant)
        return self._tokens.resolve(token, target)

    # ------------------------------
    # Labels
    # ------------------------------

    @property
    def verbose_labels(self) -> VerboseLabels:
        return self._verbose_labels

    @property
    def short_labels(self) -> ShortLabels:
        return self._short_labels

    def update_verbose_labels(self, **overrides: str) -> VerboseLabels:
        """Override verbose labels; entries not named keep their value.

        Raises:
            pydantic.ValidationError: For unknown names or unsupported placeholders
        """
        with self._labels_lock:
            self._verbose_labels = self._verbose_labels.with_overrides(overrides)
            labels = self._verbose_labels
        logger.info("Verbose labels updated", extra={"labels": sorted(overrides)})
        return labels

    def update_short_labels(self, **overrides: str) -> ShortLabels:
        """Override short labels; entries not named keep their value.

        Raises:
            pydantic.ValidationError: For unknown names or unsupported placeholders
        """
        with self._labels_lock:
            self._short_labels = self._short_labels.with_overrides(overrides)
            labels = self._short_labels
        logger.info("Short labels updated", extra={"labels": sorted(overrides)})
        return labels

    # ------------------------------
    # Formatting
    # ------------------------------

    def now(self) -> Instant:
        return self._clock()

    def format(self, instant: object, template: str | None = None) -> str:
        """Render an instant (Instant, datetime or epoch milliseconds) with a template."""
        return format_date(coerce_instant(instant), template, self._tokens.snapshot())

    def relative_verbose(self, instant: object, template: str | None = None) -> str:
        """Describe an instant as a years/months/days distance from now."""
        return relative_verbose(
            coerce_instant(instant),
            now=self._clock(),
            labels=self._verbose_labels,
            tokens=self._tokens,
            template=template,
        )

    def relative_short(self, instant: object) -> str:
        """Describe a past instant with a short banded phrase."""
        return relative_short(coerce_instant(instant), now=self._clock(), labels=self._short_labels)
