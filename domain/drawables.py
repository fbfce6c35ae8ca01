from __future__ import annotations

from functools import partial
from typing import Any

from domain.models import Drawable, DrawableConstructor

GATE_KINDS = ("ctrl", "octrl", "targ", "phase", "meter", "swap", "terminator")


def make_drawable(
    kind: str,
    column: int,
    row: int,
    *,
    label: str | None = None,
    offset: int = 0,
    **options: Any,
) -> Drawable:
    return Drawable(kind=kind, column=column, row=row, label=label, offset=offset, options=options)


def gate(label: str, **options: Any) -> DrawableConstructor:
    return partial(make_drawable, "gate", label=label, **options)


def control(offset: int = 0, **options: Any) -> DrawableConstructor:
    return partial(make_drawable, "ctrl", offset=offset, **options)


def open_control(offset: int = 0, **options: Any) -> DrawableConstructor:
    return partial(make_drawable, "octrl", offset=offset, **options)


def target(**options: Any) -> DrawableConstructor:
    return partial(make_drawable, "targ", **options)


def phase(**options: Any) -> DrawableConstructor:
    return partial(make_drawable, "phase", **options)


def measure(**options: Any) -> DrawableConstructor:
    return partial(make_drawable, "meter", **options)


def swap(**options: Any) -> DrawableConstructor:
    return partial(make_drawable, "swap", **options)


def terminator() -> DrawableConstructor:
    """Zero-size placeholder that carries the wire line to the last column."""
    return partial(make_drawable, "terminator")


def drawable_by_name(name: str, **options: Any) -> DrawableConstructor:
    """Resolve a catalogue kind case-insensitively; any other name labels a gate box."""
    label = name.strip()
    kind = label.lower()
    if kind in GATE_KINDS:
        return partial(make_drawable, kind, **options)
    return gate(label, **options)
