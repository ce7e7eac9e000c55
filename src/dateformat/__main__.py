"""Command line entry point for dateformat.

Formats an instant given as epoch milliseconds (default: now) with a token
template, or prints one of the relative-time descriptions. Configuration
(name tables, labels, default offset) comes from an optional YAML file.

Examples:
  dateformat "Y-m-d H:i:s"
  dateformat "l, F jS {at} g:ia" --epoch-ms 1705287845000 --offset 60
  dateformat --relative short --epoch-ms 1705287845000
  dateformat --list-tokens
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from dateformat.core.config import ConfigurationError, MainConfig, load_main_config
from dateformat.core.engine import DateFormatter
from dateformat.types.instant import Instant
from dateformat.utils.formatting import stringify
from dateformat.utils.logging import configure_logging

__all__ = ["main"]

DEFAULT_TEMPLATE = "c"

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 1


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    CLI Arguments:
        FORMAT: Token template (default: "c", ISO 8601)
        --epoch-ms: Instant to format, in milliseconds since the epoch
        --offset: UTC offset in minutes (overrides config)
        --relative: Print a relative description instead (short or verbose)
        --config, -c: Path to YAML configuration file
        --log-level: Override log level from config
        --list-tokens: Print every token with its value and exit
    """
    parser = argparse.ArgumentParser(
        prog="dateformat",
        description="Format an instant with single-character date tokens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dateformat "Y-m-d H:i:s"
  dateformat "l, F jS {at} g:ia" --epoch-ms 1705287845000 --offset 60
  dateformat --relative short --epoch-ms 1705287845000
  dateformat --list-tokens
        """,
    )

    _ = parser.add_argument(
        "template",
        nargs="?",
        default=None,
        help=f"Token template (default: {DEFAULT_TEMPLATE!r}; verbose relative uses it for %%d)",
        metavar="FORMAT",
    )

    _ = parser.add_argument(
        "--epoch-ms",
        type=int,
        default=None,
        help="Instant in milliseconds since the Unix epoch (default: now)",
        metavar="MS",
    )

    _ = parser.add_argument(
        "--offset",
        type=int,
        default=None,
        help="UTC offset in minutes east of UTC (overrides config)",
        metavar="MINUTES",
    )

    _ = parser.add_argument(
        "--relative",
        choices=["short", "verbose"],
        default=None,
        help="Print a relative-time description instead of the formatted date",
    )

    _ = parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration",
        metavar="LEVEL",
    )

    _ = parser.add_argument(
        "--list-tokens",
        action="store_true",
        help="Print every registered token with its value for the instant",
    )

    return parser.parse_args(argv)


def render(
    *,
    config: MainConfig,
    template: str | None,
    epoch_ms: int | None,
    offset_minutes: int | None,
    relative: str | None,
    list_tokens: bool,
) -> str:
    """Produce the CLI output for already parsed arguments."""
    logger = logging.getLogger(__name__)

    offset = config.application.offset_minutes if offset_minutes is None else offset_minutes
    engine = DateFormatter.from_config(config, clock=lambda: Instant.now(offset))
    instant = engine.now() if epoch_ms is None else Instant.from_epoch_ms(epoch_ms, offset)
    logger.debug("Rendering instant", extra={"epoch_ms": instant.epoch_ms, "offset_minutes": offset})

    if list_tokens:
        snapshot = engine.tokens.snapshot()
        return "\n".join(f"{token}  {stringify(snapshot[token](instant))}" for token in sorted(snapshot))

    if relative == "short":
        return engine.relative_short(instant)
    if relative == "verbose":
        return engine.relative_verbose(instant, template if template is not None else "Y-m-d")

    return engine.format(instant, template if template is not None else DEFAULT_TEMPLATE)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point for the dateformat command.

    Exit Codes:
        0: Output printed
        1: Configuration error or runtime error
    """
    args = parse_arguments(argv)

    # Extract args with type annotations to avoid reportAny at argparse boundary
    config_path_arg: Path | None = args.config  # pyright: ignore[reportAny]  # argparse boundary
    log_level_arg: str | None = args.log_level  # pyright: ignore[reportAny]  # argparse boundary

    try:
        config = load_main_config(config_path_arg) if config_path_arg is not None else MainConfig()

        configure_logging(log_level=log_level_arg or config.application.log_level)

        output = render(
            config=config,
            template=args.template,  # pyright: ignore[reportAny]  # argparse boundary
            epoch_ms=args.epoch_ms,  # pyright: ignore[reportAny]  # argparse boundary
            offset_minutes=args.offset,  # pyright: ignore[reportAny]  # argparse boundary
            relative=args.relative,  # pyright: ignore[reportAny]  # argparse boundary
            list_tokens=args.list_tokens,  # pyright: ignore[reportAny]  # argparse boundary
        )

    except ConfigurationError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    except (ValueError, OverflowError) as exc:
        # Instants outside the datetime range, or an invalid log level
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)

    print(output)
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
