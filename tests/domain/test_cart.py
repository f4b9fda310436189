"""Unit tests for the customer Cart and its stock admission."""

import pytest

from fut75.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    InvalidQuantity,
    MissingCustomerInfo,
    UnknownSize,
    ValidationError,
)
from fut75.domain.model.cart import Cart
from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Money


def _product(stock=None, price="149.90") -> Product:
    stock = stock if stock is not None else {"M": 3, "G": 0}
    return Product(
        id="1", name="Brasil Home", category="Seleções", price=Money.of(price),
        sizes=list(stock), stock_by_size=dict(stock), stock=sum(stock.values()),
    )


class TestAddItem:

    def test_add_within_stock(self):
        cart = Cart()
        cart.add_item(_product(), "M", 2)
        assert cart.staged_quantity("1", "M") == 2
        assert cart.item_count == 2

    def test_add_beyond_stock_keeps_previous_quantity(self):
        product = _product()
        cart = Cart()
        cart.add_item(product, "M", 2)
        with pytest.raises(InsufficientStock, match="need 4, have 3"):
            cart.add_item(product, "M", 2)
        assert cart.staged_quantity("1", "M") == 2

    def test_add_out_of_stock_size_rejected(self):
        cart = Cart()
        with pytest.raises(InsufficientStock):
            cart.add_item(_product(), "G", 1)
        assert cart.is_empty

    def test_add_merges_lines_of_same_size(self):
        product = _product()
        cart = Cart()
        cart.add_item(product, "M", 1)
        cart.add_item(product, "M", 2)
        assert len(cart.lines) == 1
        assert cart.staged_quantity("1", "M") == 3

    def test_add_unknown_size_rejected(self):
        with pytest.raises(UnknownSize):
            Cart().add_item(_product(), "XG", 1)

    def test_add_zero_rejected(self):
        with pytest.raises(InvalidQuantity):
            Cart().add_item(_product(), "M", 0)

    def test_price_is_captured_when_added(self):
        product = _product()
        cart = Cart()
        cart.add_item(product, "M", 2)
        product.update_price(Money.of("199.90"))
        assert cart.total == Money.of("299.80")

    def test_untracked_product_uses_total_stock(self):
        product = Product(
            id="7", name="Cachecol", category="Acessórios",
            price=Money.of("59.90"), sizes=["U"], stock=2,
        )
        cart = Cart()
        cart.add_item(product, "U", 2)
        with pytest.raises(InsufficientStock):
            cart.add_item(product, "U", 1)


class TestUpdateQuantity:

    def _staged(self):
        product = _product()
        cart = Cart()
        cart.add_item(product, "M", 1)
        return cart, product

    def test_update_within_stock(self):
        cart, product = self._staged()
        result = cart.update_quantity(product, "M", 3)
        assert result.quantity == 3
        assert not result.capped

    def test_update_beyond_stock_is_capped(self):
        cart, product = self._staged()
        result = cart.update_quantity(product, "M", 5)
        assert result.capped
        assert cart.staged_quantity("1", "M") == 3

    def test_update_to_zero_removes_line(self):
        cart, product = self._staged()
        result = cart.update_quantity(product, "M", 0)
        assert result.removed
        assert cart.is_empty

    def test_sold_out_line_is_dropped(self):
        cart, product = self._staged()
        product.set_quantity("M", 0)
        result = cart.update_quantity(product, "M", 1)
        assert result.capped and result.removed
        assert cart.is_empty

    def test_negative_rejected(self):
        cart, product = self._staged()
        with pytest.raises(InvalidQuantity):
            cart.update_quantity(product, "M", -1)

    def test_missing_line(self):
        cart, product = self._staged()
        with pytest.raises(EntityNotFoundError):
            cart.update_quantity(product, "G", 1)


class TestCheckout:

    def test_checkout_returns_draft(self):
        cart = Cart()
        cart.add_item(_product(), "M", 2)
        draft = cart.checkout("  Ana ", "(75) 98128-4738")
        assert draft.customer_name == "Ana"
        assert draft.total == Money.of("299.80")
        assert [(line.size, line.quantity) for line in draft.lines] == [("M", 2)]

    def test_draft_is_detached_from_cart(self):
        product = _product()
        cart = Cart()
        cart.add_item(product, "M", 1)
        draft = cart.checkout("Ana", "75981284738")
        cart.update_quantity(product, "M", 3)
        assert draft.lines[0].quantity == 1

    @pytest.mark.parametrize("name,phone", [("", "75981284738"), ("Ana", "  ")])
    def test_missing_customer_info(self, name, phone):
        cart = Cart()
        cart.add_item(_product(), "M", 1)
        with pytest.raises(MissingCustomerInfo):
            cart.checkout(name, phone)

    def test_empty_cart(self):
        with pytest.raises(ValidationError, match="Cart is empty"):
            Cart().checkout("Ana", "75981284738")
