"""Configuration system for dateformat.

This module implements the configuration schema using Pydantic for
validation: the calendar name tables used by the token table, the two label
sets used by the relative-time engines, and application settings for the
command line. Configuration files are YAML with support for environment
variable resolution and fail-fast validation with actionable error messages.
"""

import os
import re
from collections.abc import Mapping, Set
from pathlib import Path
from typing import Annotated, ClassVar, Final, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dateformat.utils.template import TemplateError, validate_template

# Regular expression pattern for environment variable references
# Matches ${VARIABLE_NAME} syntax where VARIABLE_NAME can contain letters, digits, and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

DEFAULT_MONTHS: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DEFAULT_DAYS: Final[tuple[str, ...]] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


class _OverridableModel(BaseModel):
    """Frozen model whose entries can be overridden into a new validated copy."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def with_overrides(self, overrides: Mapping[str, object]) -> Self:
        """Return a validated copy with the given entries replaced.

        Raises:
            ValidationError: If an override names an unknown entry or is invalid
        """
        return self.model_validate({**self.model_dump(), **overrides})


class NameTables(_OverridableModel):
    """Calendar name tables used by the textual tokens (F, M, D, l, S)."""

    months: Annotated[
        tuple[str, ...],
        Field(
            min_length=12,
            max_length=12,
            description="Full month names, January first",
        ),
    ] = DEFAULT_MONTHS
    days: Annotated[
        tuple[str, ...],
        Field(
            min_length=7,
            max_length=7,
            description="Full weekday names, Sunday first",
        ),
    ] = DEFAULT_DAYS
    suffixes: Annotated[
        dict[int, str],
        Field(description="Ordinal suffix by day of month"),
    ] = {1: "st", 2: "nd", 3: "rd"}
    default_suffix: Annotated[
        str,
        Field(description="Ordinal suffix for days missing from suffixes"),
    ] = "th"

    @field_validator("months", "days", mode="after")
    @classmethod
    def validate_names_not_blank(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that every name has visible text.

        Raises:
            ValueError: If any name is empty or whitespace
        """
        for name in v:
            if not name.strip():
                msg = "Names must not be blank"
                raise ValueError(msg)
        return v


class _LabelSet(_OverridableModel):
    """Base for label sets; subclasses declare which markers they substitute."""

    allowed_placeholders: ClassVar[Set[str]] = frozenset()

    @field_validator("*", mode="after")
    @classmethod
    def validate_placeholders(cls, v: str) -> str:
        """Validate that the label only uses markers its engine substitutes.

        Raises:
            ValueError: If the label contains an unsupported %x marker
        """
        try:
            validate_template(v, cls.allowed_placeholders)
        except TemplateError as e:
            raise ValueError(str(e)) from e
        return v


class VerboseLabels(_LabelSet):
    """Labels for the verbose years/months/days breakdown.

    ``%t`` is the magnitude of a fragment, ``%d`` the formatted date and
    ``%r`` the space-joined fragments.
    """

    allowed_placeholders: ClassVar[Set[str]] = frozenset({"t", "d", "r"})

    years: str = "%t years"
    year: str = "1 year"
    months: str = "%t months"
    month: str = "1 month"
    days: str = "%t days"
    day: str = "1 day"
    today: str = "%d (ends today)"
    since: str = "%d (%r since)"
    until: str = "%d (%r left)"
    never: str = "Never"


class ShortLabels(_LabelSet):
    """Labels for the banded short phrase ("5 minutes ago").

    ``%t`` is the magnitude of the selected band.
    """

    allowed_placeholders: ClassVar[Set[str]] = frozenset({"t"})

    never: str = "Never"
    now: str = "right now"
    seconds: str = "%t seconds ago"
    minute: str = "about 1 minute ago"
    minutes: str = "%t minutes ago"
    hour: str = "about 1 hour ago"
    hours: str = "%t hours ago"
    yesterday: str = "yesterday"
    days: str = "%t days ago"
    years: str = "over a year ago"


class LabelsConfig(BaseModel):
    """Both relative-time label sets."""

    verbose: Annotated[
        VerboseLabels,
        Field(description="Labels for the verbose relative breakdown"),
    ] = VerboseLabels()
    short: Annotated[
        ShortLabels,
        Field(description="Labels for the banded short phrase"),
    ] = ShortLabels()


class ApplicationConfig(BaseModel):
    """Configuration for command line behavior."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    offset_minutes: Annotated[
        int,
        Field(
            ge=-1439,
            le=1439,
            description="UTC offset in minutes applied to instants built by the CLI",
        ),
    ] = 0


class MainConfig(BaseModel):
    """Main configuration schema.

    Top-level configuration container aggregating all configuration sections:
    - names: Month/day name tables and ordinal suffixes
    - labels: Verbose and short relative-time labels
    - application: Command line settings

    Every section has built-in defaults, so an empty file is valid.
    """

    names: Annotated[
        NameTables,
        Field(description="Calendar name tables"),
    ] = NameTables()
    labels: Annotated[
        LabelsConfig,
        Field(description="Relative-time label sets"),
    ] = LabelsConfig()
    application: Annotated[
        ApplicationConfig,
        Field(description="Application-level configuration"),
    ] = ApplicationConfig()


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails."""


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    This exception provides detailed, actionable error messages for configuration
    issues including file not found, YAML parsing errors, and validation failures.
    """


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string value.

    Args:
        value: String potentially containing ${VARIABLE_NAME} references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing

    Examples:
        >>> os.environ["SINCE_LABEL"] = "%d (%r ago)"
        >>> resolve_env_var("${SINCE_LABEL}")
        '%d (%r ago)'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable before loading the configuration."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Recursively resolve environment variables in a dictionary.

    Traverses nested dictionaries and lists, resolving environment variable
    references in string values. Non-string values are preserved as-is.

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing

    Examples:
        >>> os.environ["NOW_LABEL"] = "just now"
        >>> resolve_env_vars_in_dict({"short": {"now": "${NOW_LABEL}"}})
        {'short': {'now': 'just now'}}
    """
    result: dict[str, object] = {}

    for key, value in data.items():
        if isinstance(value, str):
            result[key] = resolve_env_var(value)
        elif isinstance(value, dict):
            # YAML data is untyped at load time; validated by Pydantic after resolution
            result[key] = resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
        elif isinstance(value, list):
            resolved_list: list[object] = []
            for item in value:  # pyright: ignore[reportUnknownVariableType]  # YAML list items
                if isinstance(item, str):
                    resolved_list.append(resolve_env_var(item))
                elif isinstance(item, dict):
                    resolved_list.append(resolve_env_vars_in_dict(item))  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
                else:
                    resolved_list.append(item)  # pyright: ignore[reportUnknownArgumentType]  # YAML primitives
            result[key] = resolved_list
        else:
            result[key] = value

    return result


def format_validation_error(error: ValidationError, *, heading: str) -> str:
    """Format Pydantic validation errors with field-level diagnostics."""
    error_lines = [heading, ""]
    for detail in error.errors():
        field_path = " → ".join(str(loc) for loc in detail["loc"])
        error_lines.append(f"  Field: {field_path}")
        error_lines.append(f"  Error: {detail['msg']}")
        error_lines.append(f"  Type: {detail['type']}")
        error_lines.append("")
    return "\n".join(error_lines)


def load_main_config(config_path: Path) -> MainConfig:
    """Load and validate configuration from a YAML file.

    Loads the configuration file, resolves environment variables, and
    validates against the MainConfig schema.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If configuration file cannot be loaded or is invalid

    Examples:
        >>> config = load_main_config(Path("dateformat.yaml"))
        >>> config.labels.short.now
        'right now'
    """
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}\nPlease create a configuration file at this location."
        raise ConfigurationError(msg)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    # An empty file means all defaults
    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = f"Environment variable resolution failed in: {config_path}\n{e}"
        raise ConfigurationError(msg) from e

    try:
        config = MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        msg = format_validation_error(e, heading="Configuration validation failed:")
        msg += f"Configuration file: {config_path}\nPlease fix the above errors and try again."
        raise ConfigurationError(msg) from e

    return config
