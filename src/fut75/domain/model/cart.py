"""Customer cart with stock admission.

The cart never holds more of a product size than the stock the product
reported when the line was last touched.  Adds are all-or-nothing: a
request that would overshoot is rejected and the staged quantity is left
as it was.  Quantity edits are clamped instead, and report the cap.

Checkout only produces a draft for the outbound message; the ledger is
untouched until staff complete the resulting order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fut75.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    InvalidQuantity,
    MissingCustomerInfo,
    UnknownSize,
    ValidationError,
)
from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Money


@dataclass
class CartLine:
    product_id: str
    product_name: str
    size: str
    quantity: int
    unit_price: Money  # captured when first added

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class AdmissionResult:
    """Outcome of a quantity edit."""

    quantity: int
    capped: bool = False
    removed: bool = False


@dataclass(frozen=True)
class OrderDraft:
    """Checkout payload handed to the outbound message channel."""

    customer_name: str
    customer_phone: str
    lines: tuple[CartLine, ...]
    total: Money


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)

    # --- Queries --------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    def staged_quantity(self, product_id: str, size: str) -> int:
        line = self._find(product_id, size)
        return line.quantity if line else 0

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, size: str, quantity: int = 1) -> CartLine:
        """Stage *quantity* more units of *product* in *size*.

        Raises InsufficientStock when the staged total would exceed the
        available stock; nothing is staged in that case.
        """
        if quantity < 1:
            raise InvalidQuantity("Quantity must be positive")
        if size not in product.sizes:
            raise UnknownSize(f"Size '{size}' is not available for {product.name}")

        available = product.available_for(size)
        line = self._find(product.id, size)
        existing = line.quantity if line else 0
        if existing + quantity > available:
            raise InsufficientStock(product.name, size, existing + quantity, available)

        if line is None:
            line = CartLine(product.id, product.name, size, quantity, product.price)
            self.lines.append(line)
        else:
            line.quantity += quantity
        return line

    def update_quantity(self, product: Product, size: str, quantity: int) -> AdmissionResult:
        if quantity < 0:
            raise InvalidQuantity("Quantity cannot be negative")
        line = self._find(product.id, size)
        if line is None:
            raise EntityNotFoundError(f"{product.name} size {size} is not in the cart")
        if quantity == 0:
            self.remove_item(product.id, size)
            return AdmissionResult(quantity=0, removed=True)

        available = product.available_for(size)
        if available == 0:
            self.remove_item(product.id, size)
            return AdmissionResult(quantity=0, capped=True, removed=True)

        line.quantity = min(quantity, available)
        return AdmissionResult(quantity=line.quantity, capped=quantity > available)

    def remove_item(self, product_id: str, size: str) -> None:
        self.lines = [
            line for line in self.lines
            if not (line.product_id == product_id and line.size == size)
        ]

    def checkout(self, customer_name: str, customer_phone: str) -> OrderDraft:
        name = (customer_name or "").strip()
        phone = (customer_phone or "").strip()
        if not name or not phone:
            raise MissingCustomerInfo("Customer name and phone are required to check out")
        if self.is_empty:
            raise ValidationError("Cart is empty")

        return OrderDraft(
            customer_name=name,
            customer_phone=phone,
            lines=tuple(
                CartLine(line.product_id, line.product_name, line.size, line.quantity, line.unit_price)
                for line in self.lines
            ),
            total=self.total,
        )

    # --- Internal helpers -----------------------------------------------------

    def _find(self, product_id: str, size: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id and line.size == size:
                return line
        return None
