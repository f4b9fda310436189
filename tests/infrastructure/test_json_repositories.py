"""Tests for the JSON-file repositories."""

import json
from decimal import Decimal

from fut75.domain.model.order import Order, OrderItem, OrderStatus
from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Money, Quantity
from fut75.infrastructure.persistence.json_category_repository import JsonCategoryRepository
from fut75.infrastructure.persistence.json_order_repository import JsonOrderRepository
from fut75.infrastructure.persistence.json_product_repository import JsonProductRepository


def _product() -> Product:
    return Product(
        id="1", name="Brasil Home", category="Seleções", price=Money.of("149.90"),
        sizes=["P", "M"], stock_by_size={"P": 4, "M": 6}, stock=10,
        image_url="https://example.com/brasil.jpg",
    )


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        repo = JsonProductRepository(path)
        assert repo.list_all() == []
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(_product())

        loaded = JsonProductRepository(path).get_by_id("1")
        assert loaded == _product()
        assert JsonProductRepository(path).get_by_name("BRASIL HOME").id == "1"

    def test_upsert_and_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.save(product)
        product.set_quantity("M", 1)
        repo.save(product)
        assert len(repo.list_all()) == 1
        assert repo.get_by_id("1").stock == 5

        repo.delete("1")
        assert repo.get_by_id("1") is None

    def test_reads_records_without_size_breakdown(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([
            {"id": "3", "name": "Cachecol", "price": "59.90", "sizes": ["U"], "stock": 7},
        ]), encoding="utf-8")

        product = JsonProductRepository(path).get_by_id("3")

        assert not product.tracks_sizes
        assert product.available_for("U") == 7
        assert product.price.amount == Decimal("59.90")


class TestJsonOrderRepository:

    def test_round_trip_keeps_returns_and_timestamp(self, tmp_path):
        path = tmp_path / "orders.json"
        order = Order.create(
            [OrderItem("1", "Brasil Home", "M", Quantity(3), Money.of("149.90"))],
            customer_name="Ana", customer_phone="(75) 98128-4738",
            status=OrderStatus.COMPLETED,
        )
        order.apply_return({0: 1})
        JsonOrderRepository(path).save(order)

        loaded = JsonOrderRepository(path).get_by_id(order.id)

        assert loaded == order
        assert loaded.status == OrderStatus.PARTIALLY_RETURNED
        assert loaded.items[0].returned_quantity == 1
        assert loaded.created_at.tzinfo is not None

    def test_save_replaces_existing(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = Order.create([OrderItem("1", "Brasil Home", "M", Quantity(1), Money.of("149.90"))])
        repo.save(order)
        order.cancel()
        repo.save(order)

        [stored] = repo.list_all()
        assert stored.status == OrderStatus.CANCELLED

    def test_missing_order(self, tmp_path):
        assert JsonOrderRepository(tmp_path / "orders.json").get_by_id("x") is None


class TestJsonCategoryRepository:

    def test_save_all(self, tmp_path):
        path = tmp_path / "categories.json"
        JsonCategoryRepository(path).save_all(["Seleções", "Boné"])
        assert JsonCategoryRepository(path).list_all() == ["Seleções", "Boné"]
        assert "Seleções" in path.read_text(encoding="utf-8")
