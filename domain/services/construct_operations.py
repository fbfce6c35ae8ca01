from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Annotated, Any, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PlainValidator, ValidationError

from domain.drawables import control, open_control
from domain.errors import ArityError, DistinctWiresError, OperationArgumentError
from domain.models import Barrier, DrawableConstructor, Operation, Supplement
from domain.wires import WireArg, WireLike, all_scalar, as_wire_arg, broadcast

WireField = Annotated[WireArg, PlainValidator(as_wire_arg)]

Built = Union[Operation, list[Operation]]


class _ShapeSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)


class SingleWireSpec(_ShapeSpec):
    wires: WireField


class EndpointPairSpec(_ShapeSpec):
    source: WireField
    target: WireField


class MultiControlSpec(_ShapeSpec):
    controls: Tuple[WireField, ...] = Field(..., min_length=1)
    target: WireField


def _build_spec(spec_cls: type[_ShapeSpec], caller: str, **values: Any) -> Any:
    try:
        return spec_cls(**values)
    except ValidationError as exc:
        errors = exc.errors()
        unexpected = sorted(
            str(error["loc"][0]) for error in errors if error["type"] == "extra_forbidden"
        )
        if unexpected:
            msg = f"{caller}() got unexpected keyword argument(s): {', '.join(unexpected)}"
        else:
            location = ".".join(str(part) for part in errors[0]["loc"])
            msg = f"{caller}() received an invalid '{location}': {errors[0]['msg']}"
        raise OperationArgumentError(msg) from exc


def _one_or_many(operations: list[Operation], *args: WireArg) -> Built:
    if all_scalar(*args):
        return operations[0]
    return operations


def operation(
    anchor_wire: int,
    drawable: DrawableConstructor,
    width: int | None = 1,
    supplements: Iterable[tuple[int, DrawableConstructor]] = (),
) -> Operation:
    if isinstance(anchor_wire, bool) or not isinstance(anchor_wire, int):
        msg = f"Anchor wire must be an integer, got {anchor_wire!r}"
        raise OperationArgumentError(msg)
    if not callable(drawable):
        msg = f"Drawable constructor must be callable, got {drawable!r}"
        raise OperationArgumentError(msg)
    if width is not None and (isinstance(width, bool) or not isinstance(width, int) or width < 1):
        msg = f"Operation width must be a positive integer, got {width!r}"
        raise OperationArgumentError(msg)
    marks: list[Supplement] = []
    for item in supplements:
        wire, mark = item
        if isinstance(wire, bool) or not isinstance(wire, int) or not callable(mark):
            msg = f"Supplement must be a (wire, constructor) pair, got {item!r}"
            raise OperationArgumentError(msg)
        marks.append(Supplement(wire=wire, drawable=mark))
    return Operation(
        anchor_wire=anchor_wire, drawable=drawable, width=width, supplements=tuple(marks)
    )


def barrier(start: int = 0, end: int | None = None) -> Barrier:
    for value in (start, end):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            msg = f"Barrier bounds must be integers, got {value!r}"
            raise OperationArgumentError(msg)
    return Barrier(start=start, end=end)


def single_wire(drawable: DrawableConstructor, wires: WireLike, **extra: Any) -> Built:
    spec: SingleWireSpec = _build_spec(SingleWireSpec, "single_wire", wires=wires, **extra)
    operations = [operation(wire, drawable) for (wire,) in broadcast(spec.wires)]
    return _one_or_many(operations, spec.wires)


def two_endpoint(
    anchor: DrawableConstructor, partner: DrawableConstructor, *endpoints: WireLike
) -> Built:
    """Pair an anchor drawable on ``from`` with a partner drawable on ``to``.

    Both constructors are forwarded unchanged; callers that want the anchor to
    draw a connecting line bind its ``offset`` themselves.
    """
    if len(endpoints) != 2:
        msg = f"two_endpoint() takes exactly 2 wire arguments ({len(endpoints)} given)"
        raise ArityError(msg)
    source, target = endpoints
    spec: EndpointPairSpec = _build_spec(
        EndpointPairSpec, "two_endpoint", source=source, target=target
    )
    operations: list[Operation] = []
    for from_wire, to_wire in broadcast(spec.source, spec.target):
        if from_wire == to_wire:
            msg = f"Endpoints must be different wires, got {from_wire} twice"
            raise DistinctWiresError(msg)
        operations.append(
            operation(
                from_wire,
                anchor,
                width=abs(to_wire - from_wire) + 1,
                supplements=[(to_wire, partner)],
            )
        )
    return _one_or_many(operations, spec.source, spec.target)


def multi_control(
    drawable: DrawableConstructor, controls: Sequence[WireLike], target: WireLike
) -> Built:
    if isinstance(controls, (int, str, bytes)):
        msg = "multi_control() expects a sequence of control wire arguments"
        raise OperationArgumentError(msg)
    spec: MultiControlSpec = _build_spec(
        MultiControlSpec, "multi_control", controls=tuple(controls), target=target
    )
    operations: list[Operation] = []
    for instance in broadcast(*spec.controls, spec.target):
        *control_wires, target_wire = instance
        if len(set(instance)) != len(instance):
            msg = f"Control and target wires must be pairwise distinct, got {list(instance)}"
            raise DistinctWiresError(msg)
        low, high = min(instance), max(instance)
        span = high - low
        ordered_controls = sorted(control_wires)
        if low == target_wire:
            anchor = drawable
            marks = [(wire, open_control()) for wire in ordered_controls if wire != high]
            marks.append((high, open_control(offset=-span)))
        else:
            # A control at ``high`` with the target in between gets no mark.
            anchor = control(offset=span)
            marks = [(wire, open_control()) for wire in ordered_controls if low < wire < high]
            marks.append((target_wire, drawable))
            marks.sort(key=lambda mark: mark[0])
        operations.append(operation(low, anchor, width=span + 1, supplements=marks))
    return _one_or_many(operations, *spec.controls, spec.target)
