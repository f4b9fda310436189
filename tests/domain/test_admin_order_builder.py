"""Unit tests for staff order staging and submission."""

import pytest

from fut75.domain.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    UnknownSize,
    ValidationError,
)
from fut75.domain.model.order import OrderStatus
from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Money
from fut75.domain.service.admin_order_builder import AdminOrderBuilder, LineUpdate
from fut75.domain.service.stock_ledger import StockLedger
from tests.fakes import FailingOrderRepository, FakeOrderRepository, FakeProductRepository


def _product(product_id, name, stock, price="149.90") -> Product:
    return Product(
        id=product_id, name=name, category="Seleções", price=Money.of(price),
        sizes=list(stock), stock_by_size=dict(stock), stock=sum(stock.values()),
    )


def _setup(order_repo=None):
    product_repo = FakeProductRepository([
        _product("1", "Brasil Home", {"P": 2, "M": 3}),
        _product("2", "Argentina Away", {"G": 4}, price="129.90"),
    ])
    order_repo = order_repo or FakeOrderRepository()
    ledger = StockLedger(product_repo)
    builder = AdminOrderBuilder(product_repo, order_repo, ledger)
    return builder, ledger, product_repo, order_repo


class TestStaging:

    def test_add_merges_same_size(self):
        builder, *_ = _setup()
        builder.add_line("1", "M", 1)
        builder.add_line("1", "M", 2)
        assert len(builder.lines) == 1
        assert builder.lines[0].quantity.value == 3

    def test_add_beyond_stock_rejected(self):
        builder, *_ = _setup()
        builder.add_line("1", "M", 2)
        with pytest.raises(InsufficientStock):
            builder.add_line("1", "M", 2)
        assert builder.lines[0].quantity.value == 2

    def test_add_unknown_size(self):
        builder, *_ = _setup()
        with pytest.raises(UnknownSize):
            builder.add_line("1", "XG", 1)

    def test_add_zero_rejected(self):
        builder, *_ = _setup()
        with pytest.raises(InvalidQuantity):
            builder.add_line("1", "M", 0)

    def test_update_caps_at_stock(self):
        builder, *_ = _setup()
        builder.add_line("1", "M", 1)
        assert builder.update_line(0, 10) == LineUpdate.CAPPED
        assert builder.lines[0].quantity.value == 3

    def test_update_to_zero_removes(self):
        builder, *_ = _setup()
        builder.add_line("1", "M", 1)
        assert builder.update_line(0, 0) == LineUpdate.REMOVED
        assert builder.lines == []

    def test_update_sold_out_removes(self):
        builder, ledger, *_ = _setup()
        builder.add_line("1", "M", 1)
        ledger.set("1", "M", 0)
        assert builder.update_line(0, 1) == LineUpdate.REMOVED

    def test_remove_unknown_line(self):
        builder, *_ = _setup()
        with pytest.raises(ValidationError, match="No staged line #1"):
            builder.remove_line(0)


class TestSubmit:

    def test_submit_with_debit_completes_and_takes_stock(self):
        builder, _, product_repo, order_repo = _setup()
        builder.add_line("1", "M", 2)
        builder.add_line("2", "G", 1)

        order = builder.submit(debit_stock_immediately=True, customer_name="Ana")

        assert order.status == OrderStatus.COMPLETED
        assert order.total_value == Money.of("429.70")
        assert product_repo.get_by_id("1").quantity_for("M") == 1
        assert product_repo.get_by_id("2").quantity_for("G") == 3
        assert order_repo.get_by_id(order.id) is order
        assert builder.lines == []

    def test_submit_without_debit_leaves_stock(self):
        builder, _, product_repo, _ = _setup()
        builder.add_line("1", "M", 2)
        order = builder.submit(debit_stock_immediately=False)
        assert order.status == OrderStatus.PENDING
        assert order.customer_name == "STORE"
        assert product_repo.get_by_id("1").quantity_for("M") == 3

    def test_stock_reduced_after_staging_rolls_back_everything(self):
        builder, ledger, product_repo, order_repo = _setup()
        builder.add_line("1", "M", 2)
        builder.add_line("2", "G", 4)
        ledger.set("2", "G", 3)

        with pytest.raises(InsufficientStock, match="Argentina Away size G"):
            builder.submit(debit_stock_immediately=True)

        assert product_repo.get_by_id("1").quantity_for("M") == 3
        assert product_repo.get_by_id("2").quantity_for("G") == 3
        assert order_repo.list_all() == []
        assert len(builder.lines) == 2

    def test_failed_order_save_restores_stock(self):
        builder, _, product_repo, _ = _setup(FailingOrderRepository())
        builder.add_line("1", "M", 2)
        with pytest.raises(OSError):
            builder.submit(debit_stock_immediately=True)
        assert product_repo.get_by_id("1").quantity_for("M") == 3

    def test_submit_empty_rejected(self):
        builder, *_ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            builder.submit(debit_stock_immediately=True)
