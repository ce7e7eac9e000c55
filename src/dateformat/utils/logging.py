"""Logging setup for the dateformat command line and library consumers.

The library itself only creates module loggers with ``logging.getLogger``
and attaches structured context through ``extra``. Handlers are installed
by applications, typically through ``configure_logging`` from the CLI.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Final, TextIO, override

# Log format constants
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s%(context)s"

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Standard LogRecord attributes, excluded when rendering extra context
_STANDARD_ATTRS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys() | {"message", "asctime", "context", "taskName"}
)


class ContextFilter(logging.Filter):
    """Logging filter that renders ``extra`` fields onto the record.

    Fields passed with ``logger.info("...", extra={"token": "Y"})`` are
    appended to the message as `` [token=Y]`` so they survive a plain
    text formatter.
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        fields = {
            name: value
            for name, value in vars(record).items()
            if name not in _STANDARD_ATTRS and not name.startswith("_")
        }
        if fields:
            rendered = " ".join(f"{name}={value!r}" for name, value in sorted(fields.items()))
            record.context = f" [{rendered}]"
        else:
            record.context = ""
        return True


def configure_logging(
    *,
    log_level: str = "INFO",
    enable_console: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure application logging with structured console output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Enable console output handler
        stream: Stream for the console handler (default: stderr)

    Raises:
        ValueError: If log_level is not a known level name

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> logger = logging.getLogger(__name__)
        >>> logger.debug("Registered token", extra={"token": "Q"})
    """
    normalized = log_level.upper().strip()
    if normalized not in VALID_LOG_LEVELS:
        msg = f"Invalid log level {log_level!r}. Valid options: {', '.join(sorted(VALID_LOG_LEVELS))}"
        raise ValueError(msg)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, normalized))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(ContextFilter())
        root_logger.addHandler(console_handler)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    extra: Mapping[str, object] | None = None,
) -> None:
    """Log a message with additional context fields.

    Example:
        >>> log_with_context(
        ...     logging.getLogger(__name__),
        ...     logging.INFO,
        ...     "Labels updated",
        ...     extra={"label_set": "short", "keys": ["now"]},
        ... )
    """
    logger.log(level, message, extra=dict(extra) if extra else {})
