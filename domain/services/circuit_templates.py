from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List, Optional

from domain.drawables import control, gate, phase, swap
from domain.errors import OperationArgumentError
from domain.models import CircuitLayout, LayoutStep
from domain.ports.layout import LayoutEngine
from domain.services.construct_operations import barrier, single_wire, two_endpoint


def _extend(steps: List[LayoutStep], built: object) -> None:
    if isinstance(built, list):
        steps.extend(built)
    else:
        steps.append(built)  # type: ignore[arg-type]


def graph_state_operations(
    edges: Iterable[Sequence[int]], wire_count: Optional[int] = None
) -> List[LayoutStep]:
    """Hadamard on every vertex, then one controlled-phase per edge."""
    edge_list = [tuple(edge) for edge in edges]
    for edge in edge_list:
        if len(edge) != 2:
            msg = f"Graph edges must join exactly two vertices, got {edge}"
            raise OperationArgumentError(msg)
    if wire_count is None:
        if not edge_list:
            msg = "Graph state needs at least one edge or an explicit wire_count"
            raise OperationArgumentError(msg)
        wire_count = max(max(edge) for edge in edge_list) + 1

    steps: List[LayoutStep] = []
    _extend(steps, single_wire(gate("H"), list(range(wire_count))))
    steps.append(barrier())
    for left, right in edge_list:
        _extend(steps, two_endpoint(control(offset=right - left), phase(), left, right))
    return steps


def fourier_transform_operations(wire_count: int, with_swaps: bool = True) -> List[LayoutStep]:
    if wire_count < 1:
        msg = f"Fourier transform needs at least one wire, got {wire_count}"
        raise OperationArgumentError(msg)
    steps: List[LayoutStep] = []
    for wire in range(wire_count):
        _extend(steps, single_wire(gate("H"), wire))
        for source in range(wire + 1, wire_count):
            rotation = gate(f"R_{source - wire + 1}")
            _extend(steps, two_endpoint(control(offset=wire - source), rotation, source, wire))
    if with_swaps:
        for wire in range(wire_count // 2):
            partner = wire_count - 1 - wire
            _extend(steps, two_endpoint(swap(offset=partner - wire), swap(), wire, partner))
    return steps


class CircuitTemplates:
    def __init__(self, layout_engine: LayoutEngine) -> None:
        self.layout_engine = layout_engine

    def graph_state(
        self, edges: Iterable[Sequence[int]], wire_count: Optional[int] = None
    ) -> CircuitLayout:
        steps = graph_state_operations(edges, wire_count)
        return self.layout_engine.build_layout(steps, wire_count=wire_count or "auto")

    def fourier_transform(self, wire_count: int, with_swaps: bool = True) -> CircuitLayout:
        steps = fourier_transform_operations(wire_count, with_swaps)
        return self.layout_engine.build_layout(steps, wire_count=wire_count)
