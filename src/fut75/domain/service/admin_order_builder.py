"""Domain service: Admin Order Builder.

Staff stage lines for a walk-in (or phoned-in) customer and then decide
whether the sale takes stock right away:

- ``submit(debit_stock_immediately=True)`` re-checks every line against
  the current ledger and commits them all, or none, then records a
  ``completed`` order.
- ``submit(debit_stock_immediately=False)`` records a ``pending`` order
  and leaves stock alone until the order is confirmed.
"""

from __future__ import annotations

from enum import Enum

import structlog

from fut75.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    InvalidQuantity,
    UnknownSize,
    ValidationError,
)
from fut75.domain.model.order import Order, OrderItem, OrderStatus
from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Quantity
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.repository.product_repository import ProductRepository
from fut75.domain.service.stock_ledger import StockLedger, StockRequest

logger = structlog.get_logger(__name__)


class LineUpdate(Enum):
    UPDATED = "updated"
    CAPPED = "capped"
    REMOVED = "removed"


class AdminOrderBuilder:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        ledger: StockLedger,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._ledger = ledger
        self.lines: list[OrderItem] = []

    # --- Staging --------------------------------------------------------------

    def add_line(self, product_id: str, size: str, quantity: int) -> OrderItem:
        """Stage *quantity* units; merges with an existing line for the same size."""
        product = self._load(product_id)
        if size not in product.sizes:
            raise UnknownSize(f"Size '{size}' is not available for {product.name}")

        requested = Quantity(quantity).value
        index = self._index_of(product_id, size)
        staged = self.lines[index].quantity.value if index is not None else 0
        available = product.available_for(size)
        if staged + requested > available:
            raise InsufficientStock(product.name, size, staged + requested, available)

        if index is None:
            line = OrderItem(
                product_id=product.id,
                product_name=product.name,
                size=size,
                quantity=Quantity(requested),
                unit_price=product.price,  # <-- price snapshot
            )
            self.lines.append(line)
            return line

        line = self.lines[index]
        line.quantity = Quantity(staged + requested)
        return line

    def update_line(self, index: int, quantity: int) -> LineUpdate:
        if quantity < 0:
            raise InvalidQuantity("Quantity cannot be negative")
        line = self._line_at(index)
        if quantity == 0:
            self.remove_line(index)
            return LineUpdate.REMOVED

        available = self._load(line.product_id).available_for(line.size)
        if available == 0:
            self.remove_line(index)
            return LineUpdate.REMOVED
        if quantity > available:
            line.quantity = Quantity(available)
            return LineUpdate.CAPPED
        line.quantity = Quantity(quantity)
        return LineUpdate.UPDATED

    def remove_line(self, index: int) -> None:
        self._line_at(index)
        del self.lines[index]

    # --- Submission -----------------------------------------------------------

    def submit(
        self,
        debit_stock_immediately: bool,
        customer_name: str | None = None,
        customer_phone: str | None = None,
    ) -> Order:
        if not self.lines:
            raise ValidationError("Order must contain at least one item")

        status = OrderStatus.COMPLETED if debit_stock_immediately else OrderStatus.PENDING
        order = Order.create(
            items=list(self.lines),
            customer_name=customer_name,
            customer_phone=customer_phone,
            status=status,
        )

        if not debit_stock_immediately:
            self._order_repo.save(order)
        else:
            requests = [
                StockRequest(line.product_id, line.size, line.quantity.value)
                for line in self.lines
            ]
            with self._ledger.locks.hold(r.product_id for r in requests):
                snapshots = self._ledger.commit(requests)
                try:
                    self._order_repo.save(order)
                except Exception:
                    logger.error("Saving order failed, restoring stock", order_id=order.id)
                    self._ledger.restore(snapshots)
                    raise

        logger.info(
            "Admin order submitted", order_id=order.id,
            status=order.status.value, lines=len(order.items),
        )
        self.lines = []
        return order

    # --- Internal helpers -----------------------------------------------------

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _index_of(self, product_id: str, size: str) -> int | None:
        for i, line in enumerate(self.lines):
            if line.product_id == product_id and line.size == size:
                return i
        return None

    def _line_at(self, index: int) -> OrderItem:
        if not 0 <= index < len(self.lines):
            raise ValidationError(f"No staged line #{index + 1}")
        return self.lines[index]
