from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, List, Union

from domain import drawables
from domain.errors import (
    BarrierRangeError,
    DistinctWiresError,
    OperationArgumentError,
    WireRangeError,
)
from domain.models import (
    AUTO,
    Barrier,
    CircuitLayout,
    Drawable,
    DrawableConstructor,
    LayoutStep,
    Operation,
    WireCount,
)
from domain.ports.layout import LayoutEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Filler:
    pass


@dataclass(frozen=True)
class Positioned:
    drawable: Drawable


Slot = Union[Filler, Positioned]
FILLER = Filler()


@dataclass(frozen=True)
class LayoutConfig:
    base_column: int = 1
    base_row: int = 0
    append_trailing_wire: bool = True
    terminator: DrawableConstructor = field(default_factory=drawables.terminator)


def flatten_steps(operations: Iterable[Any]) -> list[LayoutStep]:
    steps: list[LayoutStep] = []
    for item in operations:
        if item is None:
            continue
        if isinstance(item, (Operation, Barrier)):
            steps.append(item)
        elif isinstance(item, (list, tuple)):
            steps.extend(flatten_steps(item))
        else:
            msg = f"Expected an operation, a barrier or a list of them, got {item!r}"
            raise OperationArgumentError(msg)
    return steps


class TrackPackingEngine(LayoutEngine):
    """Greedy column assignment over one track per wire.

    Steps are placed strictly in input order. Each step first lifts every wire
    it covers to the skyline of that span, then draws all of its marks in the
    same column.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def build_layout(
        self, operations: Iterable[Any], wire_count: WireCount = AUTO
    ) -> CircuitLayout:
        steps = flatten_steps(operations)
        resolved_count = self._resolve_wire_count(steps, wire_count)
        if resolved_count == 0:
            return CircuitLayout(
                items=[], wire_count=0, column_count=self.config.base_column, track_lengths=()
            )

        tracks: List[List[Slot]] = [[] for _ in range(resolved_count)]
        for step in steps:
            low, high = self._covering_interval(step, resolved_count)
            self._place(step, low, high, tracks)

        longest = max(len(track) for track in tracks)
        for track in tracks:
            track.extend([FILLER] * (longest + 1 - len(track)))

        final_column = self.config.base_column + longest
        if self.config.append_trailing_wire:
            final_column += 1
        last_wire = resolved_count - 1
        items: list[Drawable] = [
            self.config.terminator(final_column, self.config.base_row + last_wire)
        ]
        items.extend(
            slot.drawable for track in tracks for slot in track if isinstance(slot, Positioned)
        )
        logger.debug(
            "Packed %d steps onto %d wires, final column %d",
            len(steps),
            resolved_count,
            final_column,
        )
        return CircuitLayout(
            items=items,
            wire_count=resolved_count,
            column_count=final_column,
            track_lengths=tuple(len(track) for track in tracks),
        )

    def _resolve_wire_count(self, steps: list[LayoutStep], wire_count: WireCount) -> int:
        if wire_count == AUTO:
            highest = -1
            for step in steps:
                if isinstance(step, Barrier):
                    highest = max(highest, step.start if step.end is None else step.end)
                else:
                    highest = max(highest, step.last_wire)
            return highest + 1
        if isinstance(wire_count, bool) or not isinstance(wire_count, int) or wire_count < 1:
            msg = f"wire_count must be a positive integer or 'auto', got {wire_count!r}"
            raise OperationArgumentError(msg)
        return wire_count

    def _covering_interval(self, step: LayoutStep, wire_count: int) -> tuple[int, int]:
        if isinstance(step, Barrier):
            self._check_wire(step.start, wire_count)
            if step.end is None:
                return step.start, wire_count - 1
            if step.end < step.start:
                msg = f"Barrier end {step.end} precedes its start {step.start}"
                raise BarrierRangeError(msg)
            if step.end >= wire_count:
                msg = f"Barrier end {step.end} exceeds a circuit with {wire_count} wires"
                raise BarrierRangeError(msg)
            return step.start, step.end

        drawn = step.drawn_wires()
        for wire in drawn:
            self._check_wire(wire, wire_count)
        if len(set(drawn)) != len(drawn):
            msg = f"Operation draws more than one mark on a wire: {drawn}"
            raise DistinctWiresError(msg)
        low, high = step.first_wire, step.last_wire
        self._check_wire(high, wire_count)
        return low, high

    def _check_wire(self, wire: int, wire_count: int) -> None:
        if wire < 0 or wire >= wire_count:
            raise WireRangeError(wire, wire_count)

    def _place(self, step: LayoutStep, low: int, high: int, tracks: List[List[Slot]]) -> None:
        skyline = max(len(tracks[wire]) for wire in range(low, high + 1))
        is_barrier = isinstance(step, Barrier)
        drawn = set() if is_barrier else set(step.drawn_wires())
        for wire in range(low, high + 1):
            gap = skyline - len(tracks[wire])
            if not is_barrier and wire not in drawn:
                # Pass-through wires also reserve the column being drawn.
                gap += 1
            tracks[wire].extend([FILLER] * gap)
        if is_barrier:
            return

        column = self.config.base_column + skyline
        row = self.config.base_row
        tracks[step.anchor_wire].append(Positioned(step.drawable(column, row + step.anchor_wire)))
        for supplement in step.supplements:
            tracks[supplement.wire].append(
                Positioned(supplement.drawable(column, row + supplement.wire))
            )


def build(
    *operations: Any,
    wire_count: WireCount = AUTO,
    base_column: int = 1,
    base_row: int = 0,
    append_trailing_wire: bool = True,
) -> list[Drawable]:
    engine = TrackPackingEngine(
        LayoutConfig(
            base_column=base_column,
            base_row=base_row,
            append_trailing_wire=append_trailing_wire,
        )
    )
    return engine.build_layout(operations, wire_count=wire_count).items
