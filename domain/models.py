from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

AUTO = "auto"
SCHEMA_VERSION = "1.0"

WireCount = Union[int, Literal["auto"]]


@dataclass(frozen=True)
class Drawable:
    kind: str
    column: int
    row: int
    label: str | None = None
    offset: int = 0
    options: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "column": self.column,
            "row": self.row,
        }
        if self.label is not None:
            payload["label"] = self.label
        if self.offset:
            payload["offset"] = self.offset
        if self.options:
            payload["options"] = dict(self.options)
        return payload


# Anything called as ``constructor(column, row)``; styling is bound beforehand.
DrawableConstructor = Callable[..., Drawable]


@dataclass(frozen=True)
class Supplement:
    wire: int
    drawable: DrawableConstructor


@dataclass(frozen=True)
class Operation:
    anchor_wire: int
    drawable: DrawableConstructor
    width: int | None = 1
    supplements: tuple[Supplement, ...] = ()

    @property
    def effective_width(self) -> int:
        return 2 if self.width is None else self.width

    @property
    def first_wire(self) -> int:
        """Lowest wire the operation draws on, supplements included.

        This is the anchor for every shape except a reversed pair, whose partner
        sits below the anchor. The covering interval then starts at the partner
        rather than at ``anchor_wire``.
        """
        return min([self.anchor_wire, *(supplement.wire for supplement in self.supplements)])

    @property
    def last_wire(self) -> int:
        return max(
            [
                self.first_wire + self.effective_width - 1,
                self.anchor_wire,
                *(supplement.wire for supplement in self.supplements),
            ]
        )

    def drawn_wires(self) -> list[int]:
        return [self.anchor_wire, *(supplement.wire for supplement in self.supplements)]


@dataclass(frozen=True)
class Barrier:
    """Synchronisation-only step; ``end=None`` runs to the last wire."""

    start: int = 0
    end: int | None = None

    @property
    def width(self) -> int | None:
        if self.end is None:
            return None
        return self.end - self.start + 1


LayoutStep = Union[Operation, Barrier]


@dataclass(frozen=True)
class CircuitLayout:
    items: List[Drawable]
    wire_count: int
    column_count: int
    track_lengths: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "wire_count": self.wire_count,
            "column_count": self.column_count,
            "items": [item.to_dict() for item in self.items],
        }


WireValue = Union[int, List[int]]


class SingleWireEntry(BaseModel):
    kind: Literal["single"]
    gate: str = Field(..., min_length=1)
    wires: WireValue


class PairEntry(BaseModel):
    kind: Literal["pair"]
    anchor: str = "ctrl"
    partner: str = "targ"
    source: WireValue
    target: WireValue


class MultiControlEntry(BaseModel):
    kind: Literal["multi_control"]
    gate: str = Field(..., min_length=1)
    controls: List[WireValue] = Field(..., min_length=1)
    target: WireValue


class BarrierEntry(BaseModel):
    kind: Literal["barrier"]
    start: int = 0
    end: Optional[int] = None


CircuitEntry = Annotated[
    Union[SingleWireEntry, PairEntry, MultiControlEntry, BarrierEntry],
    Field(discriminator="kind"),
]


class CircuitDocument(BaseModel):
    title: Optional[str] = None
    wire_count: WireCount = AUTO
    operations: List[CircuitEntry] = Field(default_factory=list)

    @field_validator("wire_count", mode="after")
    @classmethod
    def ensure_positive_wire_count(cls, value: WireCount) -> WireCount:
        if isinstance(value, int) and value < 1:
            msg = f"wire_count must be positive or 'auto', got {value}"
            raise ValueError(msg)
        return value
