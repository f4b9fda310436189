"""Application service: Return Order use case.

Completed (or partially returned) orders give units back to the ledger,
either everything still outstanding or a per-item selection.  Requested
quantities above what is still returnable are clamped down, not
rejected.  The order ends ``returned`` once every unit is back, and
``partially_returned`` otherwise.
"""

from __future__ import annotations

import structlog

from fut75.application.confirm_order import load_order, order_lock_keys
from fut75.domain.exceptions import ValidationError
from fut75.domain.model.order import Order, OrderStatus
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.service.stock_ledger import StockLedger, StockRequest

logger = structlog.get_logger(__name__)


class ReturnOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: StockLedger,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger

    def handle(
        self,
        order_id: str,
        partial_items: dict[tuple[str, str], int] | None = None,
    ) -> OrderStatus:
        """Return an order, fully or partially.

        Args:
            order_id: The order to return.
            partial_items: If provided, a mapping of (product_name, size) ->
                quantity to give back. If None, returns every outstanding unit.
        """
        order = load_order(self._order_repo, order_id)

        with self._ledger.locks.hold(order_lock_keys(order)):
            order = load_order(self._order_repo, order_id)

            if partial_items is None:
                plan = order.plan_full_return()
            else:
                plan = order.plan_partial_return(self._resolve_items(order, partial_items))

            requests = [
                StockRequest(order.items[i].product_id, order.items[i].size, qty)
                for i, qty in plan.items()
            ]
            previous = order.capture_state()
            snapshots = self._ledger.credit(requests)

            order.apply_return(plan)
            try:
                self._order_repo.save(order)
            except Exception:
                logger.error("Saving returned order failed, restoring stock", order_id=order_id)
                order.restore_state(previous)
                self._ledger.restore(snapshots)
                raise

        logger.info(
            "Order returned", order_id=order_id,
            status=order.status.value, units=sum(plan.values()),
        )
        return order.status

    @staticmethod
    def _resolve_items(
        order: Order, requested: dict[tuple[str, str], int]
    ) -> dict[int, int]:
        """Map (product name, size) pairs to item positions in the order."""
        result: dict[int, int] = {}
        for (name, size), qty in requested.items():
            for i, item in enumerate(order.items):
                if item.product_name.lower() == name.lower() and item.size == size:
                    result[i] = qty
                    break
            else:
                raise ValidationError(
                    f"'{name}' size {size} not found in order {order.id}"
                )
        return result
