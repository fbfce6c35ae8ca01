from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import CircuitDocument


class CircuitRepository(Protocol):
    def load(self, path: Path) -> CircuitDocument: ...

    def load_all(self, directory: Path) -> Sequence[CircuitDocument]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, CircuitDocument]]: ...
