"""Application services: stock adjustments and the inventory view."""

from __future__ import annotations

from dataclasses import dataclass

from fut75.domain.model.size import sort_sizes
from fut75.domain.repository.product_repository import ProductRepository
from fut75.domain.service.stock_ledger import StockLedger


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    category: str
    by_size: list[tuple[str, int | None]]  # None: product has no per-size stock
    total: int


class AdjustStockHandler:
    """Staff edits of per-size stock from the admin console."""

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def set_quantity(self, product_id: str, size: str, quantity: int) -> None:
        self._ledger.set(product_id, size, quantity)

    def add_size(self, product_id: str, size: str, quantity: int = 0) -> None:
        self._ledger.add_size(product_id, size, quantity)

    def remove_size(self, product_id: str, size: str) -> None:
        self._ledger.remove_size(product_id, size)


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[InventoryLineDTO]:
        products = sorted(self._product_repo.list_all(), key=lambda p: int(p.id))
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                category=p.category,
                by_size=[
                    (s, p.quantity_for(s) if p.tracks_sizes else None)
                    for s in sort_sizes(p.sizes)
                ],
                total=p.stock,
            )
            for p in products
        ]
