"""Domain service: Stock Ledger.

The authoritative per-size quantity for every product.  Each operation is
a locked read-modify-write against the product repository; the product
recomputes its cached ``stock`` in the same write, so the total and the
per-size map are persisted together.

Single-item decrements clamp at zero instead of failing: by the time an
order is completed its quantities were already bounded by admission, and
completion must not break on a race.  ``commit()`` is the strict variant
used when staff debit stock at order creation: it checks every line and
undoes the whole batch if one of them no longer fits.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from fut75.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    InvalidQuantity,
    UnknownSize,
)
from fut75.domain.model.product import Product, StockSnapshot
from fut75.domain.repository.product_repository import ProductRepository
from fut75.domain.service.keyed_locks import KeyedLocks

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockRequest:
    product_id: str
    size: str
    quantity: int


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self.locks = locks or KeyedLocks()

    # --- Reads ----------------------------------------------------------------

    def get(self, product_id: str, size: str) -> int:
        return self._load(product_id).quantity_for(size)

    def available(self, product_id: str, size: str) -> int:
        """Sellable units, falling back to total stock for untracked products."""
        return self._load(product_id).available_for(size)

    # --- Single-size writes ---------------------------------------------------

    def set(self, product_id: str, size: str, quantity: int) -> None:
        with self.locks.hold([product_id]):
            product = self._load(product_id)
            legacy_total = _legacy_total(product)
            product.set_quantity(size, quantity)
            self._product_repo.save(product)
        _warn_if_legacy_replaced(product, legacy_total)
        logger.info(
            "Stock set", product_id=product_id, size=size,
            quantity=quantity, stock=product.stock,
        )

    def decrement(self, product_id: str, size: str, amount: int) -> int:
        """Take *amount* units out, flooring at zero.  Returns the new level."""
        _require_non_negative(amount)
        with self.locks.hold([product_id]):
            product = self._load(product_id)
            before = product.available_for(size)
            new_quantity = product.adjust(size, -amount)
            self._product_repo.save(product)
        if amount > before:
            logger.warning(
                "Stock decrement clamped at zero", product_id=product_id,
                size=size, requested=amount, available=before,
            )
        logger.info("Stock decremented", product_id=product_id, size=size, amount=amount)
        return new_quantity

    def increment(self, product_id: str, size: str, amount: int) -> int:
        _require_non_negative(amount)
        with self.locks.hold([product_id]):
            product = self._load(product_id)
            new_quantity = product.adjust(size, amount)
            self._product_repo.save(product)
        logger.info("Stock incremented", product_id=product_id, size=size, amount=amount)
        return new_quantity

    def add_size(self, product_id: str, label: str, initial_quantity: int = 0) -> None:
        with self.locks.hold([product_id]):
            product = self._load(product_id)
            legacy_total = _legacy_total(product)
            product.add_size(label, initial_quantity)
            self._product_repo.save(product)
        _warn_if_legacy_replaced(product, legacy_total)
        logger.info("Size added", product_id=product_id, size=label, quantity=initial_quantity)

    def remove_size(self, product_id: str, label: str) -> None:
        with self.locks.hold([product_id]):
            product = self._load(product_id)
            product.remove_size(label)
            self._product_repo.save(product)
        logger.info("Size removed", product_id=product_id, size=label)

    # --- Batches --------------------------------------------------------------

    def commit(self, requests: list[StockRequest]) -> list[StockSnapshot]:
        """Debit every request or none of them.

        Each line is checked against the stock left after the lines before
        it.  On the first line that does not fit, every product already
        written in this batch is restored and InsufficientStock is raised.
        Returns the pre-batch snapshots so callers can undo the commit.
        """
        return self._apply(requests, sign=-1, strict=True)

    def debit(self, requests: list[StockRequest]) -> list[StockSnapshot]:
        """Clamped decrement of every request, undone if a write fails.

        Sizes removed from a product since the order was placed have no
        stock left, so their lines are skipped.
        """
        return self._apply(requests, sign=-1, strict=False)

    def credit(self, requests: list[StockRequest]) -> list[StockSnapshot]:
        """Put units back, undone if a write fails.

        A size removed from the product is reinstated to hold the units.
        """
        return self._apply(requests, sign=1, strict=False)

    def restore(self, snapshots: Iterable[StockSnapshot]) -> None:
        """Write captured pre-batch stock levels back."""
        snapshots = list(snapshots)
        with self.locks.hold(s.product_id for s in snapshots):
            for snapshot in snapshots:
                product = self._product_repo.get_by_id(snapshot.product_id)
                if product is None:
                    logger.warning(
                        "Cannot restore stock of deleted product",
                        product_id=snapshot.product_id,
                    )
                    continue
                product.restore(snapshot)
                self._product_repo.save(product)
        logger.info("Stock restored", products=[s.product_id for s in snapshots])

    # --- Internal helpers -----------------------------------------------------

    def _apply(
        self,
        requests: list[StockRequest],
        sign: int,
        strict: bool,
    ) -> list[StockSnapshot]:
        for request in requests:
            _require_non_negative(request.quantity)

        snapshots: dict[str, StockSnapshot] = {}
        with self.locks.hold(r.product_id for r in requests):
            try:
                for request in requests:
                    product = self._load(request.product_id)
                    removed = request.size not in product.sizes
                    if removed and strict:
                        raise UnknownSize(
                            f"Size '{request.size}' is not available for {product.name}"
                        )
                    if removed and sign < 0:
                        # Nothing left to take; same as clamping at zero.
                        logger.warning(
                            "Debit of removed size skipped", product_id=product.id,
                            size=request.size, requested=request.quantity,
                        )
                        continue

                    available = product.available_for(request.size)
                    if strict and sign < 0 and request.quantity > available:
                        raise InsufficientStock(
                            product.name, request.size, request.quantity, available
                        )
                    snapshots.setdefault(product.id, product.snapshot())
                    if removed:
                        logger.warning(
                            "Size reinstated to take returned units",
                            product_id=product.id, size=request.size,
                        )
                        product.reinstate_size(request.size)
                    product.adjust(request.size, sign * request.quantity)
                    self._product_repo.save(product)
            except Exception:
                if snapshots:
                    logger.warning(
                        "Rolling back stock batch",
                        products=sorted(snapshots),
                    )
                    self.restore(snapshots.values())
                raise

        logger.info(
            "Stock batch applied",
            direction="debit" if sign < 0 else "credit",
            lines=len(requests),
            products=sorted(snapshots),
        )
        return list(snapshots.values())

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product


def _require_non_negative(amount: int) -> None:
    if amount < 0:
        raise InvalidQuantity(f"Stock amount cannot be negative, got {amount}")


def _legacy_total(product: Product) -> int | None:
    return None if product.tracks_sizes else product.stock


def _warn_if_legacy_replaced(product: Product, legacy_total: int | None) -> None:
    """A first per-size write on an untracked product replaces its total."""
    if legacy_total is not None and product.tracks_sizes and legacy_total != product.stock:
        logger.warning(
            "Per-size stock replaced untracked total", product_id=product.id,
            previous_total=legacy_total, stock=product.stock,
        )
