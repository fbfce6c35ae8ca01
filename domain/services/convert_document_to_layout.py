from __future__ import annotations

from typing import List

from domain.drawables import drawable_by_name
from domain.models import (
    BarrierEntry,
    CircuitDocument,
    CircuitEntry,
    CircuitLayout,
    LayoutStep,
    MultiControlEntry,
    PairEntry,
    SingleWireEntry,
)
from domain.ports.layout import LayoutEngine
from domain.services.construct_operations import (
    barrier,
    multi_control,
    single_wire,
    two_endpoint,
)
from domain.wires import as_wire_arg, broadcast


class CircuitDocumentConverter:
    def __init__(self, layout_engine: LayoutEngine) -> None:
        self.layout_engine = layout_engine

    def convert(self, document: CircuitDocument) -> CircuitLayout:
        return self.layout_engine.build_layout(
            self.to_operations(document), wire_count=document.wire_count
        )

    def to_operations(self, document: CircuitDocument) -> List[LayoutStep]:
        steps: List[LayoutStep] = []
        for entry in document.operations:
            built = self._build_entry(entry)
            if isinstance(built, list):
                steps.extend(built)
            else:
                steps.append(built)
        return steps

    def _build_entry(self, entry: CircuitEntry) -> object:
        if isinstance(entry, SingleWireEntry):
            return single_wire(drawable_by_name(entry.gate), entry.wires)
        if isinstance(entry, PairEntry):
            return self._build_pairs(entry)
        if isinstance(entry, MultiControlEntry):
            return multi_control(drawable_by_name(entry.gate), entry.controls, entry.target)
        if isinstance(entry, BarrierEntry):
            return barrier(entry.start, entry.end)
        msg = f"Unsupported circuit entry: {entry!r}"
        raise TypeError(msg)

    def _build_pairs(self, entry: PairEntry) -> List[object]:
        # Catalogue anchors draw their connecting line from a bound offset.
        pairs = broadcast(as_wire_arg(entry.source), as_wire_arg(entry.target))
        return [
            two_endpoint(
                drawable_by_name(entry.anchor, offset=to_wire - from_wire),
                drawable_by_name(entry.partner),
                from_wire,
                to_wire,
            )
            for from_wire, to_wire in pairs
        ]
