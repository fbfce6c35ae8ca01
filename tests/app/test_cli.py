from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from app.cli import app

runner = CliRunner()


def _write_document(tmp_path: Path, payload: dict[str, Any]) -> Path:
    path = tmp_path / "circuit.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _bell_payload() -> dict[str, Any]:
    return {
        "title": "Bell",
        "wire_count": 2,
        "operations": [
            {"kind": "single", "gate": "H", "wires": 0},
            {"kind": "pair", "source": 0, "target": 1},
        ],
    }


def test_layout_json_output(tmp_path: Path) -> None:
    path = _write_document(tmp_path, _bell_payload())

    result = runner.invoke(app, ["layout", str(path), "--format", "json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["title"] == "Bell"
    assert payload["column_count"] == 4
    assert payload["items"][0] == {"kind": "terminator", "column": 4, "row": 1}
    assert payload["items"][2] == {"kind": "ctrl", "column": 2, "row": 0, "offset": 1}


def test_layout_table_output(tmp_path: Path) -> None:
    path = _write_document(tmp_path, _bell_payload())

    result = runner.invoke(app, ["layout", str(path)])

    assert result.exit_code == 0, result.output
    assert "terminator" in result.stdout
    assert "Bell" in result.stdout


def test_layout_uses_config_offsets(tmp_path: Path) -> None:
    path = _write_document(tmp_path, _bell_payload())
    config_path = tmp_path / "layout.yaml"
    config_path.write_text(
        "layout:\n  base_column: 0\n  append_trailing_wire: false\n", encoding="utf-8"
    )

    result = runner.invoke(
        app, ["layout", str(path), "--format", "json", "--config", str(config_path)]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["items"][0]["column"] == 2


def test_layout_reports_out_of_range_wires(tmp_path: Path) -> None:
    payload = _bell_payload()
    payload["wire_count"] = 1
    path = _write_document(tmp_path, payload)

    result = runner.invoke(app, ["layout", str(path)])

    assert result.exit_code == 1
    assert "out of range" in result.stdout


def test_layout_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["layout", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "File not found" in result.stdout


def test_validate_accepts_and_rejects(tmp_path: Path) -> None:
    good = _write_document(tmp_path, _bell_payload())
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"operations": [{"kind": "pair", "source": 1, "target": 1}]}))

    ok_result = runner.invoke(app, ["validate", str(good)])
    bad_result = runner.invoke(app, ["validate", str(bad)])

    assert ok_result.exit_code == 0
    assert "Valid circuit document" in ok_result.stdout
    assert bad_result.exit_code == 1
    assert "Validation failed" in bad_result.stdout


def test_template_graph_state_json() -> None:
    result = runner.invoke(
        app, ["template", "graph-state", "--edge", "0-1", "--edge", "1-2", "--format", "json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["wire_count"] == 3
    assert payload["column_count"] == 5


def test_template_graph_state_rejects_malformed_edge() -> None:
    result = runner.invoke(app, ["template", "graph-state", "--edge", "0x1"])

    assert result.exit_code == 2


def test_template_fourier_json() -> None:
    result = runner.invoke(app, ["template", "fourier", "--wires", "2", "--format", "json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [item["kind"] for item in payload["items"]].count("swap") == 2


def test_template_fourier_without_swaps() -> None:
    result = runner.invoke(
        app, ["template", "fourier", "--wires", "2", "--no-swaps", "--format", "json"]
    )

    assert result.exit_code == 0, result.output
    assert "swap" not in result.stdout


def test_malformed_json_is_reported_not_raised(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    validate_result = runner.invoke(app, ["validate", str(path)])
    layout_result = runner.invoke(app, ["layout", str(path)])

    assert validate_result.exit_code == 1
    assert "Validation failed" in validate_result.stdout
    assert not isinstance(validate_result.exception, ValueError)
    assert layout_result.exit_code == 1
    assert "Layout failed" in layout_result.stdout
