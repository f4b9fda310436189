"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: a product (by name), a size and how many units."""

    product_name: str
    size: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order line as displayed to the user."""

    product_name: str
    size: str
    quantity: int
    returned_quantity: int
    unit_price: str  # formatted, e.g. "R$ 149,90"
    line_total: str

    @property
    def kept_quantity(self) -> int:
        return self.quantity - self.returned_quantity


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    sequence: int
    customer_name: str
    customer_phone: str
    status: str
    items: list[OrderItemDTO]
    total: str
    created_at: str

    @property
    def has_returns(self) -> bool:
        return any(item.returned_quantity > 0 for item in self.items)


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one row of the order list."""

    id: str
    sequence: int
    customer_name: str
    status: str
    item_count: int
    total: str
    created_at: str


@dataclass(frozen=True)
class CheckoutDTO:
    """Output: what the customer sends through WhatsApp."""

    order_id: str
    total: str
    message: str
    link: str
