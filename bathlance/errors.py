"""Error taxonomy for the replacement-schedule core."""

from __future__ import annotations


class BathlanceError(RuntimeError):
    """Base class for every error raised by the core."""


class InvalidInputError(BathlanceError, ValueError):
    """Raised when a caller supplies a value the computation cannot proceed with."""


class InvalidDateError(InvalidInputError):
    """Raised when a date value cannot be parsed into an instant."""

    def __init__(self, value, message: str | None = None):
        self.value = value
        super().__init__(message or f"Invalid date value: {value!r}")


class InsufficientStockError(BathlanceError):
    """Raised when a product is replaced with no unopened units left."""

    def __init__(self, product_id: str, product_name: str = "", stock: int | None = None):
        self.product_id = product_id
        self.product_name = product_name
        self.stock = stock
        label = product_name or product_id
        super().__init__(f"No stock remaining for {label!r}; check the shopping list.")
