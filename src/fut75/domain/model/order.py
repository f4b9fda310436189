"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its items and its status.
Transitions are checked before anything changes; stock side effects are
coordinated by the application handlers through the StockLedger.

    pending ──► completed ──► partially_returned ──► returned
       │            └──────────────────────────────►┘
       └──► cancelled
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from fut75.domain.exceptions import InvalidTransition, ValidationError
from fut75.domain.model.value_objects import Money, Quantity

WALK_IN_CUSTOMER = "STORE"
WALK_IN_PHONE = "(00) 00000-0000"


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RETURNED = "returned"
    PARTIALLY_RETURNED = "partially_returned"


RETURNABLE = (OrderStatus.COMPLETED, OrderStatus.PARTIALLY_RETURNED)


@dataclass(frozen=True)
class OrderState:
    """Mutable parts of an order, captured before a transition."""

    status: OrderStatus
    returned_quantities: tuple[int, ...]


@dataclass
class OrderItem:
    """A size-specific line with the unit price captured when it was staged.

    ``quantity`` and ``unit_price`` never change; ``returned_quantity``
    only grows, via ``give_back()``.
    """

    product_id: str
    product_name: str
    size: str
    quantity: Quantity
    unit_price: Money
    returned_quantity: int = 0

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def returnable_quantity(self) -> int:
        return self.quantity.value - self.returned_quantity

    @property
    def is_fully_returned(self) -> bool:
        return self.returnable_quantity == 0

    def give_back(self, qty: int) -> int:
        """Record a return of up to *qty* units.  Returns the units accepted."""
        accepted = max(0, min(qty, self.returnable_quantity))
        self.returned_quantity += accepted
        return accepted


@dataclass
class Order:
    """Aggregate root for customer and walk-in orders.

    Use ``Order.create()`` for new orders.  ``total_value`` is fixed at
    creation and kept as the historical total even after returns.
    """

    id: str
    customer_name: str
    customer_phone: str
    items: list[OrderItem]
    total_value: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        items: list[OrderItem],
        customer_name: str | None = None,
        customer_phone: str | None = None,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Create a new order; blank customer fields fall back to walk-in values."""
        if not items:
            raise ValidationError("Order must contain at least one item")
        if status not in (OrderStatus.PENDING, OrderStatus.COMPLETED):
            raise InvalidTransition(
                f"New orders start as pending or completed, not {status.value}"
            )

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=uuid.uuid4().hex,
            customer_name=(customer_name or "").strip() or WALK_IN_CUSTOMER,
            customer_phone=(customer_phone or "").strip() or WALK_IN_PHONE,
            items=list(items),
            total_value=total,
            status=status,
        )

    # --- State transitions ----------------------------------------------------

    def ensure_can_complete(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidTransition(
                f"Cannot complete order in {self.status.value} status, expected pending"
            )

    def complete(self) -> None:
        """Transition pending -> completed.

        The ledger debit must happen *before* calling this (coordinated by
        the application handler).
        """
        self.ensure_can_complete()
        self.status = OrderStatus.COMPLETED

    def cancel(self) -> None:
        """Transition pending -> cancelled.  No stock was ever committed."""
        if self.status != OrderStatus.PENDING:
            raise InvalidTransition(
                f"Cannot cancel order in {self.status.value} status, expected pending"
            )
        self.status = OrderStatus.CANCELLED

    def ensure_returnable(self) -> None:
        if self.status not in RETURNABLE:
            raise InvalidTransition(
                f"Cannot return items of order in {self.status.value} status"
            )

    def plan_full_return(self) -> dict[int, int]:
        """Item index -> units still to come back, for a full return."""
        self.ensure_returnable()
        return {
            index: item.returnable_quantity
            for index, item in enumerate(self.items)
            if item.returnable_quantity > 0
        }

    def plan_partial_return(self, requested: dict[int, int]) -> dict[int, int]:
        """Clamp a per-item request into ``[0, returnable]``.

        Only items with something to give back appear in the result.
        """
        self.ensure_returnable()
        plan: dict[int, int] = {}
        for index, qty in requested.items():
            item = self._item_at(index)
            accepted = max(0, min(qty, item.returnable_quantity))
            if accepted > 0:
                plan[index] = accepted
        if not plan:
            raise ValidationError("Must specify at least one item to return")
        return plan

    def apply_return(self, plan: dict[int, int]) -> None:
        """Record returned units and resolve the resulting status.

        Restocking must happen separately via the ledger.
        """
        self.ensure_returnable()
        for index, qty in plan.items():
            self._item_at(index).give_back(qty)

        if all(item.is_fully_returned for item in self.items):
            self.status = OrderStatus.RETURNED
        else:
            self.status = OrderStatus.PARTIALLY_RETURNED

    def capture_state(self) -> OrderState:
        return OrderState(
            self.status, tuple(item.returned_quantity for item in self.items)
        )

    def restore_state(self, state: OrderState) -> None:
        """Undo a transition whose result could not be stored."""
        self.status = state.status
        for item, returned in zip(self.items, state.returned_quantities):
            item.returned_quantity = returned

    # --- Computed properties --------------------------------------------------

    @property
    def product_ids(self) -> list[str]:
        return sorted({item.product_id for item in self.items})

    @property
    def has_returns(self) -> bool:
        return any(item.returned_quantity > 0 for item in self.items)

    # --- Internal helpers -----------------------------------------------------

    def _item_at(self, index: int) -> OrderItem:
        if not 0 <= index < len(self.items):
            raise ValidationError(f"Order has no item #{index + 1}")
        return self.items[index]
