from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from domain.errors import OperationArgumentError


@dataclass(frozen=True)
class Scalar:
    wire: int

    def values(self) -> tuple[int, ...]:
        return (self.wire,)


@dataclass(frozen=True)
class WireList:
    wires: tuple[int, ...]

    def values(self) -> tuple[int, ...]:
        return self.wires


WireArg = Union[Scalar, WireList]
WireLike = Union[int, Sequence[int], Scalar, WireList]


def _ensure_wire(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Wire index must be an integer, got {value!r}"
        raise OperationArgumentError(msg)
    return value


def as_wire_arg(value: WireLike) -> WireArg:
    if isinstance(value, (Scalar, WireList)):
        return value
    if isinstance(value, (str, bytes)):
        msg = f"Wire index must be an integer, got {value!r}"
        raise OperationArgumentError(msg)
    if isinstance(value, Sequence):
        wires = tuple(_ensure_wire(item) for item in value)
        if not wires:
            msg = "Wire list must not be empty"
            raise OperationArgumentError(msg)
        return WireList(wires)
    return Scalar(_ensure_wire(value))


def broadcast(*args: WireArg) -> list[tuple[int, ...]]:
    """Zip wire arguments element-wise, repeating the last element of shorter lists."""
    columns = [arg.values() for arg in args]
    length = max((len(values) for values in columns), default=0)
    padded = [values + (values[-1],) * (length - len(values)) for values in columns]
    return list(zip(*padded))


def all_scalar(*args: WireArg) -> bool:
    return all(isinstance(arg, Scalar) for arg in args)
