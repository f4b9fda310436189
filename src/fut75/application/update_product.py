"""Application services: Update Product and Delete Product use cases."""

from __future__ import annotations

import structlog

from fut75.domain.exceptions import EntityNotFoundError, ValidationError
from fut75.domain.model.category import CategoryRegistry
from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Money
from fut75.domain.repository.category_repository import CategoryRepository
from fut75.domain.repository.product_repository import ProductRepository
from fut75.domain.service.keyed_locks import KeyedLocks

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        locks: KeyedLocks,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._locks = locks

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        category: str | None = None,
        price: str | None = None,
    ) -> Product:
        """Edit catalog fields of a product.

        Price changes do NOT affect existing orders; they captured a
        price snapshot at creation time.
        """
        if name is None and category is None and price is None:
            raise ValidationError("Nothing to update")

        with self._locks.hold([product_id]):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if name is not None:
                other = self._product_repo.get_by_name(name.strip())
                if other is not None and other.id != product.id:
                    raise ValidationError(f"Product '{name.strip()}' already exists")
                product.rename(name)
            if category is not None:
                registry = CategoryRegistry(self._category_repo.list_all())
                product.recategorize(registry.require(category))
            if price is not None:
                product.update_price(Money.of(price))

            self._product_repo.save(product)

        logger.info("Product updated", product_id=product_id)
        return product


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, locks: KeyedLocks) -> None:
        self._product_repo = product_repo
        self._locks = locks

    def handle(self, product_id: str) -> None:
        with self._locks.hold([product_id]):
            if self._product_repo.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            self._product_repo.delete(product_id)
        logger.info("Product deleted", product_id=product_id)
