"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from fut75.domain.model.order import Order
from fut75.domain.model.product import Product
from fut75.domain.repository.category_repository import CategoryRepository
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.repository.product_repository import ProductRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        for o in orders or []:
            self._store[o.id] = o

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        self._store[order.id] = order


class FailingOrderRepository(FakeOrderRepository):
    """Accepts reads but fails every write, like a store that went away."""

    def save(self, order: Order) -> None:
        raise OSError("order store unavailable")


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def delete(self, product_id: str) -> None:
        self._store.pop(product_id, None)


class FakeCategoryRepository(CategoryRepository):

    def __init__(self, categories: list[str] | None = None) -> None:
        self._names = list(categories or [])

    def list_all(self) -> list[str]:
        return list(self._names)

    def save_all(self, categories: list[str]) -> None:
        self._names = list(categories)
