from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from domain.models import Drawable


@lru_cache(maxsize=1)
def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")


def positions(items: Iterable[Drawable]) -> list[tuple[str, str | None, int, int]]:
    return [(item.kind, item.label, item.row, item.column) for item in items]


def gates_only(items: Iterable[Drawable]) -> list[Drawable]:
    return [item for item in items if item.kind != "terminator"]
