"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, sizes are added and removed, stock moves per size, and
staff delete them outright.

``stock`` is a cached total persisted next to ``stock_by_size``. Every
method that writes ``stock_by_size`` recomputes it before returning, so
no caller ever sees the two disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fut75.domain.exceptions import (
    DuplicateSize,
    InvalidQuantity,
    UnknownSize,
    ValidationError,
)
from fut75.domain.model.value_objects import Money
from fut75.domain.service.stock_distribution import validate_distribution


@dataclass(frozen=True)
class StockSnapshot:
    """Pre-write copy of a product's stock, used to undo a batch."""

    product_id: str
    stock_by_size: dict[str, int]
    stock: int
    sizes: tuple[str, ...]


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.register()`` for new products; it enforces the balanced
    stock distribution.  ``__init__`` stays simple so repositories can
    reconstitute persisted products without re-validating.

    A product whose ``stock_by_size`` is empty is *untracked*: only the
    undifferentiated ``stock`` total is known for it.
    """

    id: str
    name: str
    category: str
    price: Money
    sizes: list[str] = field(default_factory=list)
    stock_by_size: dict[str, int] = field(default_factory=dict)
    stock: int = 0
    image_url: str = ""

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def register(
        product_id: str,
        name: str,
        category: str,
        price: Money,
        sizes: list[str],
        allocation: dict[str, int],
        declared_total: int,
        image_url: str = "",
    ) -> Product:
        """Create a product whose per-size allocation adds up to *declared_total*."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sizes:
            raise ValidationError("Product must have at least one size")
        if len(set(sizes)) != len(sizes):
            duplicated = next(s for s in sizes if sizes.count(s) > 1)
            raise DuplicateSize(f"Size '{duplicated}' listed more than once")

        for size, qty in allocation.items():
            if size not in sizes:
                raise UnknownSize(f"Size '{size}' is not one of {', '.join(sizes)}")
            if qty < 0:
                raise InvalidQuantity(f"Stock for size {size} cannot be negative")

        validate_distribution(declared_total, allocation)

        stock_by_size = {size: allocation.get(size, 0) for size in sizes}
        return Product(
            id=product_id,
            name=name.strip(),
            category=category.strip(),
            price=price,
            sizes=list(sizes),
            stock_by_size=stock_by_size,
            stock=sum(stock_by_size.values()),
            image_url=image_url,
        )

    # --- Queries --------------------------------------------------------------

    @property
    def tracks_sizes(self) -> bool:
        return bool(self.stock_by_size)

    def quantity_for(self, size: str) -> int:
        return self.stock_by_size.get(size, 0)

    def available_for(self, size: str) -> int:
        """Units that can be sold in *size*.

        Untracked products fall back to their total stock.
        """
        if not self.tracks_sizes:
            return self.stock
        return self.quantity_for(size)

    def snapshot(self) -> StockSnapshot:
        return StockSnapshot(
            self.id, dict(self.stock_by_size), self.stock, tuple(self.sizes)
        )

    # --- Stock mutations ------------------------------------------------------

    def set_quantity(self, size: str, quantity: int) -> None:
        if quantity < 0:
            raise InvalidQuantity(f"Stock for size {size} cannot be negative")
        self._require_size(size)
        self.stock_by_size[size] = quantity
        self._recompute_stock()

    def adjust(self, size: str, delta: int) -> int:
        """Move stock by *delta*, flooring at zero.  Returns the new level."""
        if not self.tracks_sizes:
            self.stock = max(0, self.stock + delta)
            return self.stock
        new_quantity = max(0, self.quantity_for(size) + delta)
        self.set_quantity(size, new_quantity)
        return new_quantity

    def add_size(self, label: str, initial_quantity: int = 0) -> None:
        label = label.strip()
        if not label:
            raise ValidationError("Size label is required")
        if label in self.sizes:
            raise DuplicateSize(f"Size '{label}' already exists on {self.name}")
        if initial_quantity < 0:
            raise InvalidQuantity(f"Stock for size {label} cannot be negative")
        self.sizes.append(label)
        self.stock_by_size[label] = initial_quantity
        self._recompute_stock()

    def remove_size(self, label: str) -> None:
        self._require_size(label)
        self.sizes.remove(label)
        if self.tracks_sizes:
            self.stock_by_size.pop(label, None)
            self._recompute_stock()

    def reinstate_size(self, label: str) -> None:
        """Put a removed size back, empty, so units returned in it can be counted."""
        if label in self.sizes:
            return
        self.sizes.append(label)
        # An empty untracked product has no total to keep.
        if self.tracks_sizes or self.stock == 0:
            self.stock_by_size[label] = 0

    def restore(self, snapshot: StockSnapshot) -> None:
        self.sizes = list(snapshot.sizes)
        self.stock_by_size = dict(snapshot.stock_by_size)
        self.stock = snapshot.stock

    # --- Catalog edits --------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders or staged carts because
        they capture a price snapshot when the line is added.
        """
        self.price = new_price

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()

    def recategorize(self, category: str) -> None:
        self.category = category.strip()

    # --- Internal helpers -----------------------------------------------------

    def _require_size(self, size: str) -> None:
        if size not in self.sizes:
            raise UnknownSize(f"Size '{size}' is not available for {self.name}")

    def _recompute_stock(self) -> None:
        self.stock = sum(self.stock_by_size.values())
