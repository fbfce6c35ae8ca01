from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from domain.models import AUTO, CircuitLayout, WireCount


class LayoutEngine(Protocol):
    def build_layout(
        self, operations: Iterable[Any], wire_count: WireCount = AUTO
    ) -> CircuitLayout:
        ...
