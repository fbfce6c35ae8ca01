from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from adapters.layout.track_packing import TrackPackingEngine
from domain.errors import WireRangeError
from domain.models import Barrier, CircuitDocument, Operation
from domain.services.convert_document_to_layout import CircuitDocumentConverter
from tests.helpers.layout_helpers import positions


def _payload() -> dict[str, Any]:
    return {
        "title": "Toffoli demo",
        "wire_count": 3,
        "operations": [
            {"kind": "single", "gate": "H", "wires": [0, 1, 2]},
            {"kind": "pair", "source": 0, "target": 2},
            {"kind": "multi_control", "gate": "X", "controls": [0, 1], "target": 2},
            {"kind": "barrier"},
            {"kind": "single", "gate": "meter", "wires": [0, 1, 2]},
        ],
    }


def test_document_operations_are_normalized(engine: TrackPackingEngine) -> None:
    document = CircuitDocument.model_validate(_payload())
    steps = CircuitDocumentConverter(engine).to_operations(document)

    assert len(steps) == 9
    assert isinstance(steps[5], Barrier)
    assert all(isinstance(step, Operation) for step in steps[:5] + steps[6:])


def test_document_layout_positions(engine: TrackPackingEngine) -> None:
    document = CircuitDocument.model_validate(_payload())
    layout = CircuitDocumentConverter(engine).convert(document)

    assert positions(layout.items) == [
        ("terminator", None, 2, 6),
        ("gate", "H", 0, 1),
        ("ctrl", None, 0, 2),
        ("ctrl", None, 0, 3),
        ("meter", None, 0, 4),
        ("gate", "H", 1, 1),
        ("octrl", None, 1, 3),
        ("meter", None, 1, 4),
        ("gate", "H", 2, 1),
        ("targ", None, 2, 2),
        ("gate", "X", 2, 3),
        ("meter", None, 2, 4),
    ]
    assert [item.offset for item in layout.items if item.kind == "ctrl"] == [2, 2]


def test_document_wire_count_is_enforced(engine: TrackPackingEngine) -> None:
    payload = _payload()
    payload["wire_count"] = 2
    document = CircuitDocument.model_validate(payload)

    with pytest.raises(WireRangeError):
        CircuitDocumentConverter(engine).convert(document)


def test_document_defaults_to_auto_wire_count(engine: TrackPackingEngine) -> None:
    document = CircuitDocument.model_validate(
        {
            "operations": [
                {"kind": "pair", "anchor": "swap", "partner": "swap", "source": 1, "target": 3}
            ]
        }
    )
    layout = CircuitDocumentConverter(engine).convert(document)

    assert layout.wire_count == 4
    assert [item.kind for item in layout.items] == ["terminator", "swap", "swap"]


@pytest.mark.parametrize(
    "payload",
    [
        {"wire_count": 0},
        {"wire_count": "many"},
        {"operations": [{"kind": "teleport", "wires": 0}]},
        {"operations": [{"kind": "single", "gate": "", "wires": 0}]},
        {"operations": [{"kind": "multi_control", "gate": "X", "controls": [], "target": 0}]},
    ],
)
def test_invalid_documents_are_rejected(payload: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        CircuitDocument.model_validate(payload)


def test_document_pairs_bind_anchor_offsets_per_instance(engine: TrackPackingEngine) -> None:
    document = CircuitDocument.model_validate(
        {"operations": [{"kind": "pair", "anchor": "CTRL", "source": [0, 3], "target": 1}]}
    )
    layout = CircuitDocumentConverter(engine).convert(document)

    anchors = [item for item in layout.items if item.kind == "ctrl"]
    assert [(item.row, item.offset) for item in anchors] == [(0, 1), (3, -2)]
