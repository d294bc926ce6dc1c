from __future__ import annotations

from typing import Any


class CalculationError(Exception):
    """Base class for deterministic failures of a load calculation."""


class NotFound(CalculationError):
    def __init__(self, kind: str, id: Any) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} {id} not found.")


class OversizedItem(CalculationError):
    def __init__(self, item_type) -> None:
        self.item_type = item_type
        super().__init__(f"Item {item_type.name} is too large for the container.")


class InvalidQuantity(CalculationError):
    def __init__(self, quantity: Any) -> None:
        self.quantity = quantity
        super().__init__("Quantity cannot be negative.")
