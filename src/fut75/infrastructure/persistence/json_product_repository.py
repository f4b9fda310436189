"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import CURRENCY, Money
from fut75.domain.repository.product_repository import ProductRepository
from fut75.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def delete(self, product_id: str) -> None:
        with self._file.locked():
            products = self._load()
            products.pop(product_id, None)
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in self._file.load()}

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "sizes": list(product.sizes),
            "stock_by_size": dict(product.stock_by_size),
            "stock": product.stock,
            "image_url": product.image_url,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        # Records written before per-size tracking only carry "stock".
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw.get("category", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", CURRENCY)),
            sizes=list(raw.get("sizes", [])),
            stock_by_size={k: int(v) for k, v in raw.get("stock_by_size", {}).items()},
            stock=int(raw.get("stock", 0)),
            image_url=raw.get("image_url", ""),
        )
