"""Application service: Cancel Order use case.

Only pending orders can be cancelled, and pending orders never took
stock, so cancelling is a pure status change.
"""

from __future__ import annotations

import structlog

from fut75.application.confirm_order import load_order, order_lock_keys
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.service.keyed_locks import KeyedLocks

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository, locks: KeyedLocks) -> None:
        self._order_repo = order_repo
        self._locks = locks

    def handle(self, order_id: str) -> None:
        order = load_order(self._order_repo, order_id)
        with self._locks.hold(order_lock_keys(order)):
            order = load_order(self._order_repo, order_id)
            order.cancel()
            self._order_repo.save(order)
        logger.info("Order cancelled", order_id=order_id)
