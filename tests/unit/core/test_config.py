"""Unit tests for configuration system.

Tests for Pydantic configuration models including validation logic,
field validators, label overrides and YAML loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dateformat.core.config import (
    DEFAULT_DAYS,
    DEFAULT_MONTHS,
    ENV_VAR_PATTERN,
    ApplicationConfig,
    ConfigurationError,
    EnvironmentVariableError,
    MainConfig,
    NameTables,
    ShortLabels,
    VerboseLabels,
    load_main_config,
    resolve_env_var,
    resolve_env_vars_in_dict,
)


@pytest.mark.unit
class TestNameTables:
    """Test NameTables validation and defaults."""

    def test_default_values(self) -> None:
        names = NameTables()
        assert names.months == DEFAULT_MONTHS
        assert names.days == DEFAULT_DAYS
        assert names.suffixes == {1: "st", 2: "nd", 3: "rd"}
        assert names.default_suffix == "th"

    def test_wrong_month_count(self) -> None:
        with pytest.raises(ValidationError):
            _ = NameTables(months=("January",))

    def test_wrong_day_count(self) -> None:
        with pytest.raises(ValidationError):
            _ = NameTables(days=DEFAULT_DAYS[:6])

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _ = NameTables(days=("", *DEFAULT_DAYS[1:]))
        assert "blank" in str(exc_info.value)

    def test_frozen(self) -> None:
        names = NameTables()
        with pytest.raises(ValidationError):
            names.default_suffix = "."  # pyright: ignore[reportAttributeAccessIssue]


@pytest.mark.unit
class TestLabelSets:
    """Test label defaults, placeholder validation and overrides."""

    def test_short_defaults(self) -> None:
        labels = ShortLabels()
        assert labels.never == "Never"
        assert labels.now == "right now"
        assert labels.minutes == "%t minutes ago"
        assert labels.years == "over a year ago"

    def test_verbose_defaults(self) -> None:
        labels = VerboseLabels()
        assert labels.since == "%d (%r since)"
        assert labels.until == "%d (%r left)"
        assert labels.today == "%d (ends today)"

    def test_short_label_rejects_date_placeholder(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _ = ShortLabels(minutes="%d minutes")
        assert "%d" in str(exc_info.value)

    def test_verbose_label_accepts_all_placeholders(self) -> None:
        labels = VerboseLabels(since="%d: %r (%t)")
        assert labels.since == "%d: %r (%t)"

    def test_unknown_placeholder_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _ = VerboseLabels(days="%x days")

    def test_percent_without_letter_allowed(self) -> None:
        labels = ShortLabels(now="100% now")
        assert labels.now == "100% now"

    def test_with_overrides(self) -> None:
        labels = ShortLabels().with_overrides({"now": "just now"})
        assert labels.now == "just now"
        assert labels.hours == "%t hours ago"

    def test_with_overrides_leaves_original(self) -> None:
        original = ShortLabels()
        _ = original.with_overrides({"now": "just now"})
        assert original.now == "right now"

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ValidationError):
            _ = ShortLabels().with_overrides({"unknown": "x"})


@pytest.mark.unit
class TestApplicationConfig:
    """Test ApplicationConfig validation."""

    def test_defaults(self) -> None:
        config = ApplicationConfig()
        assert config.log_level == "WARNING"
        assert config.offset_minutes == 0

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_valid_log_levels(self, level: str) -> None:
        assert ApplicationConfig(log_level=level).log_level == level

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            _ = ApplicationConfig(log_level="VERBOSE")

    @pytest.mark.parametrize("offset", [-1440, 1440])
    def test_offset_out_of_range(self, offset: int) -> None:
        with pytest.raises(ValidationError):
            _ = ApplicationConfig(offset_minutes=offset)


@pytest.mark.unit
class TestEnvironmentVariables:
    """Test ${VAR} resolution."""

    def test_pattern(self) -> None:
        assert ENV_VAR_PATTERN.findall("${A_1} and ${B}") == ["A_1", "B"]

    def test_resolve_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEFORMAT_NOW", "just now")
        assert resolve_env_var("${DATEFORMAT_NOW}!") == "just now!"

    def test_missing_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATEFORMAT_MISSING", raising=False)
        with pytest.raises(EnvironmentVariableError) as exc_info:
            _ = resolve_env_var("${DATEFORMAT_MISSING}")
        assert "DATEFORMAT_MISSING" in str(exc_info.value)

    def test_resolve_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAY_ONE", "Sonntag")
        data = {"names": {"days": ["${DAY_ONE}", "Montag"], "default_suffix": "."}, "count": 3}
        assert resolve_env_vars_in_dict(data) == {
            "names": {"days": ["Sonntag", "Montag"], "default_suffix": "."},
            "count": 3,
        }


@pytest.mark.unit
class TestLoadMainConfig:
    """Test YAML loading."""

    def test_load_full_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "dateformat.yaml"
        _ = config_file.write_text(
            "labels:\n"
            "  short:\n"
            "    now: just now\n"
            "  verbose:\n"
            "    since: '%r ago'\n"
            "names:\n"
            "  suffixes:\n"
            "    1: st\n"
            "    21: st\n"
            "application:\n"
            "  log_level: DEBUG\n"
            "  offset_minutes: 60\n",
            encoding="utf-8",
        )

        config = load_main_config(config_file)

        assert config.labels.short.now == "just now"
        assert config.labels.short.minutes == "%t minutes ago"
        assert config.labels.verbose.since == "%r ago"
        assert config.names.suffixes == {1: "st", 21: "st"}
        assert config.application.log_level == "DEBUG"
        assert config.application.offset_minutes == 60

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        _ = config_file.write_text("", encoding="utf-8")
        assert load_main_config(config_file) == MainConfig()

    def test_env_var_in_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEVER_LABEL", "not yet")
        config_file = tmp_path / "env.yaml"
        _ = config_file.write_text("labels:\n  short:\n    never: ${NEVER_LABEL}\n", encoding="utf-8")
        assert load_main_config(config_file).labels.short.never == "not yet"

    def test_missing_env_var_in_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATEFORMAT_UNSET", raising=False)
        config_file = tmp_path / "env.yaml"
        _ = config_file.write_text("labels:\n  short:\n    never: ${DATEFORMAT_UNSET}\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(config_file)
        assert "DATEFORMAT_UNSET" in str(exc_info.value)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(tmp_path / "missing.yaml")
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.yaml"
        _ = config_file.write_text("labels: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(config_file)
        assert "Failed to parse YAML" in str(exc_info.value)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        _ = config_file.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(config_file)
        assert "Expected YAML dictionary" in str(exc_info.value)

    def test_validation_error_lists_field(self, tmp_path: Path) -> None:
        config_file = tmp_path / "invalid.yaml"
        _ = config_file.write_text("labels:\n  short:\n    hours: '%d hours'\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(config_file)
        message = str(exc_info.value)
        assert "Configuration validation failed" in message
        assert "labels → short → hours" in message
