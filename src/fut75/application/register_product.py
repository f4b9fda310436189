"""Application service: Register Product use case.

A product is only created when its declared total stock is fully
distributed across its sizes.
"""

from __future__ import annotations

import structlog

from fut75.domain.exceptions import ValidationError
from fut75.domain.model.category import CategoryRegistry
from fut75.domain.model.product import Product
from fut75.domain.model.size import default_sizes_for
from fut75.domain.model.value_objects import Money
from fut75.domain.repository.category_repository import CategoryRepository
from fut75.domain.repository.product_repository import ProductRepository
from fut75.domain.service.keyed_locks import KeyedLocks

logger = structlog.get_logger(__name__)


class RegisterProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._locks = locks or KeyedLocks()

    def handle(
        self,
        name: str,
        category: str,
        price: str,
        total_stock: int,
        allocation: dict[str, int],
        sizes: list[str] | None = None,
        image_url: str = "",
    ) -> Product:
        """Add a new product to the catalog.

        When *sizes* is omitted the category decides them (one-size
        accessories get ``U``, apparel gets the full range).
        """
        registry = CategoryRegistry(self._category_repo.list_all())
        category = registry.require(category)

        # The catalog key guards the name check and id allocation.
        with self._locks.hold(["catalog"]):
            if self._product_repo.get_by_name(name.strip()) is not None:
                raise ValidationError(f"Product '{name.strip()}' already exists")

            product = Product.register(
                product_id=self._next_id(),
                name=name,
                category=category,
                price=Money.of(price),
                sizes=list(sizes) if sizes else default_sizes_for(category),
                allocation=allocation,
                declared_total=total_stock,
                image_url=image_url,
            )
            self._product_repo.save(product)
        logger.info(
            "Product registered", product_id=product.id,
            name=product.name, stock=product.stock,
        )
        return product

    def _next_id(self) -> str:
        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if not all_products:
            return "1"
        return str(max(int(p.id) for p in all_products) + 1)
