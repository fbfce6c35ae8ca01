from __future__ import annotations


class CircuitInputError(ValueError):
    """Raised when caller input cannot describe a circuit layout."""


class OperationArgumentError(CircuitInputError):
    pass


class ArityError(CircuitInputError):
    pass


class DistinctWiresError(CircuitInputError):
    pass


class WireRangeError(CircuitInputError):
    def __init__(self, wire: int, wire_count: int) -> None:
        self.wire = wire
        self.wire_count = wire_count
        msg = f"Wire {wire} is out of range for a circuit with {wire_count} wires"
        super().__init__(msg)


class BarrierRangeError(CircuitInputError):
    pass
