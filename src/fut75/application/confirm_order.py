"""Application service: Confirm Order use case.

pending -> completed.  Takes every item out of the ledger (clamped at
zero) and then flips the status; if the order cannot be saved both the
stock and the status are put back, so they move together.
"""

from __future__ import annotations

import structlog

from fut75.domain.exceptions import EntityNotFoundError
from fut75.domain.model.order import Order
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.service.stock_ledger import StockLedger, StockRequest

logger = structlog.get_logger(__name__)


def load_order(order_repo: OrderRepository, order_id: str) -> Order:
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order {order_id} not found")
    return order


def order_lock_keys(order: Order) -> list[str]:
    return [f"order:{order.id}", *order.product_ids]


class ConfirmOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: StockLedger,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger

    def handle(self, order_id: str) -> None:
        order = load_order(self._order_repo, order_id)

        with self._ledger.locks.hold(order_lock_keys(order)):
            # Re-read under the lock; a concurrent transition may have won.
            order = load_order(self._order_repo, order_id)
            order.ensure_can_complete()

            requests = [
                StockRequest(item.product_id, item.size, item.quantity.value)
                for item in order.items
            ]
            previous = order.capture_state()
            snapshots = self._ledger.debit(requests)

            order.complete()
            try:
                self._order_repo.save(order)
            except Exception:
                logger.error("Saving confirmed order failed, restoring stock", order_id=order_id)
                order.restore_state(previous)
                self._ledger.restore(snapshots)
                raise

        logger.info("Order completed", order_id=order_id, lines=len(requests))
