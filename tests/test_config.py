"""Tests for configuration management."""

import pytest
import yaml

from testrun_report.config import (
    ConfigurationError,
    ReportConfig,
    _parse_env_bool,
    _parse_env_int,
    load_config,
    validate_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "TESTRUN_REPORT_MILLIS_MODE",
        "TESTRUN_REPORT_PERCENT_DECIMALS",
        "TESTRUN_REPORT_STRIP_THREAD_IDS",
        "TESTRUN_REPORT_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


class TestReportConfig:
    """Tests for ReportConfig dataclass."""

    def test_defaults(self):
        config = ReportConfig()
        assert config.millis_mode == "remainder"
        assert config.percentage_decimals == 2
        assert config.strip_thread_ids is True
        assert config.report_format == "console"


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file(self):
        assert load_config() == ReportConfig()

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"millis_mode": "legacy", "percentage_decimals": 1}))
        config = load_config(str(path))
        assert config.millis_mode == "legacy"
        assert config.percentage_decimals == 1
        assert config.report_format == "console"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == ReportConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"report_format": "console"}))
        monkeypatch.setenv("TESTRUN_REPORT_FORMAT", "json")
        monkeypatch.setenv("TESTRUN_REPORT_STRIP_THREAD_IDS", "false")
        config = load_config(str(path))
        assert config.report_format == "json"
        assert config.strip_thread_ids is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("millis_mode: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(str(path))

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"colour": "blue"}))
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(str(path))


class TestEnvParsing:
    """Tests for environment variable parsing."""

    def test_int_unset(self):
        assert _parse_env_int("TESTRUN_REPORT_PERCENT_DECIMALS") is None

    def test_int_valid(self, monkeypatch):
        monkeypatch.setenv("TESTRUN_REPORT_PERCENT_DECIMALS", "3")
        assert _parse_env_int("TESTRUN_REPORT_PERCENT_DECIMALS") == 3

    def test_int_invalid(self, monkeypatch):
        monkeypatch.setenv("TESTRUN_REPORT_PERCENT_DECIMALS", "three")
        with pytest.raises(ConfigurationError, match="valid integer"):
            _parse_env_int("TESTRUN_REPORT_PERCENT_DECIMALS")

    @pytest.mark.parametrize("value,expected", [("1", True), ("Yes", True), ("off", False)])
    def test_bool_values(self, monkeypatch, value, expected):
        monkeypatch.setenv("TESTRUN_REPORT_STRIP_THREAD_IDS", value)
        assert _parse_env_bool("TESTRUN_REPORT_STRIP_THREAD_IDS") is expected

    def test_bool_invalid(self, monkeypatch):
        monkeypatch.setenv("TESTRUN_REPORT_STRIP_THREAD_IDS", "maybe")
        with pytest.raises(ConfigurationError, match="boolean"):
            _parse_env_bool("TESTRUN_REPORT_STRIP_THREAD_IDS")

    def test_load_reads_decimals(self, monkeypatch):
        monkeypatch.setenv("TESTRUN_REPORT_PERCENT_DECIMALS", "4")
        monkeypatch.setenv("TESTRUN_REPORT_MILLIS_MODE", "legacy")
        config = load_config()
        assert config.percentage_decimals == 4
        assert config.millis_mode == "legacy"


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_defaults(self):
        assert validate_config(ReportConfig()) == []

    def test_bad_millis_mode(self):
        errors = validate_config(ReportConfig(millis_mode="exact"))
        assert len(errors) == 1
        assert "millis_mode" in errors[0]

    def test_decimals_out_of_range(self):
        errors = validate_config(ReportConfig(percentage_decimals=9))
        assert any("percentage_decimals" in e for e in errors)

    def test_decimals_not_int(self):
        errors = validate_config(ReportConfig(percentage_decimals="2"))
        assert any("integer" in e for e in errors)

    def test_bad_report_format(self):
        errors = validate_config(ReportConfig(report_format="junit"))
        assert any("report_format" in e for e in errors)

    def test_multiple_errors(self):
        config = ReportConfig(millis_mode="x", percentage_decimals=-1, report_format="x")
        assert len(validate_config(config)) == 3

    def test_strip_thread_ids_not_bool(self):
        errors = validate_config(ReportConfig(strip_thread_ids="no"))
        assert errors == ["strip_thread_ids must be a boolean: 'no'"]

    def test_strip_thread_ids_from_yaml_string(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('strip_thread_ids: "false"\n')
        errors = validate_config(load_config(str(path)))
        assert any("strip_thread_ids" in e for e in errors)

    def test_strip_thread_ids_from_yaml_bool(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("strip_thread_ids: false\n")
        config = load_config(str(path))
        assert config.strip_thread_ids is False
        assert validate_config(config) == []
