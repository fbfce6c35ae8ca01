from __future__ import annotations

from pathlib import Path

import pytest

from app.config import AppSettings, load_settings


def test_defaults_match_layout_engine_defaults() -> None:
    settings = AppSettings()
    config = settings.layout.to_layout_config()

    assert (config.base_column, config.base_row, config.append_trailing_wire) == (1, 0, True)
    assert settings.layout.output_format == "table"


def test_env_overrides_nested_layout_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QCL_LAYOUT__BASE_COLUMN", "3")
    monkeypatch.setenv("QCL_LAYOUT__APPEND_TRAILING_WIRE", "false")

    settings = AppSettings()

    assert settings.layout.base_column == 3
    assert settings.layout.append_trailing_wire is False


def test_yaml_config_is_loaded(tmp_path: Path) -> None:
    config_path = tmp_path / "layout.yaml"
    config_path.write_text(
        "layout:\n  title: From YAML\n  base_row: 2\n  output_format: JSON\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.layout.title == "From YAML"
    assert settings.layout.base_row == 2
    assert settings.layout.output_format == "json"


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "layout.yaml"
    config_path.write_text("layout:\n  base_column: 5\n", encoding="utf-8")
    monkeypatch.setenv("QCL_CONFIG_PATH", str(config_path))

    assert load_settings().layout.base_column == 5


def test_missing_config_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")
