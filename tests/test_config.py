import logging
from pathlib import Path

import pytest

from unitscan.config import ExtractorSettings, get_settings


def test_defaults() -> None:
    settings = get_settings()
    assert settings == ExtractorSettings()
    assert settings.primary_interpreter == "pint"
    assert settings.secondary_interpreter == "ucum"
    assert settings.log_path is None
    assert settings.log_level_value == logging.INFO


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_toml_file(tmp_path: Path) -> None:
    config = tmp_path / "unitscan.toml"
    config.write_text(
        '[extraction]\nprimary = "UCUM"\nsecondary = "none"\n\n[logging]\npath = "logs/run.jsonl"\nlevel = "debug"\n',
        encoding="utf-8",
    )
    settings = get_settings(config_file=config)
    assert settings.primary_interpreter == "ucum"
    assert settings.secondary_interpreter is None
    assert settings.log_path == tmp_path.resolve() / "logs" / "run.jsonl"
    assert settings.log_level_value == logging.DEBUG


def test_yaml_file_through_environment(tmp_path: Path, monkeypatch) -> None:
    config = tmp_path / "unitscan.yaml"
    config.write_text("extraction:\n  secondary: pint\n", encoding="utf-8")
    monkeypatch.setenv("UNITSCAN_CONFIG_FILE", str(config))
    settings = get_settings(refresh=True)
    assert settings.primary_interpreter == "pint"
    assert settings.secondary_interpreter == "pint"


def test_environment_beats_file(tmp_path: Path, monkeypatch) -> None:
    config = tmp_path / "unitscan.yml"
    config.write_text("extraction:\n  primary: ucum\n  secondary: ucum\n", encoding="utf-8")
    monkeypatch.setenv("UNITSCAN_PRIMARY", "pint")
    monkeypatch.setenv("UNITSCAN_SECONDARY", "none")
    monkeypatch.setenv("UNITSCAN_LOG_LEVEL", "warning")
    settings = get_settings(config_file=config)
    assert settings.primary_interpreter == "pint"
    assert settings.secondary_interpreter is None
    assert settings.log_level == "WARNING"


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    config = tmp_path / "empty.yaml"
    config.write_text("", encoding="utf-8")
    assert get_settings(config_file=config) == ExtractorSettings()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_settings(config_file=tmp_path / "missing.toml")


def test_unsupported_format(tmp_path: Path) -> None:
    config = tmp_path / "unitscan.ini"
    config.write_text("[extraction]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        get_settings(config_file=config)


def test_primary_cannot_be_disabled(monkeypatch) -> None:
    monkeypatch.setenv("UNITSCAN_PRIMARY", "none")
    with pytest.raises(ValueError):
        get_settings(refresh=True)


def test_unknown_log_level() -> None:
    with pytest.raises(ValueError):
        ExtractorSettings(log_level="chatty").log_level_value
