"""Application service: customer Checkout use case.

The storefront cart is staged against current stock, then turned into a
WhatsApp message for the store.  Checkout records a ``pending`` order so
staff can confirm it later; stock is only taken at that point.
"""

from __future__ import annotations

from urllib.parse import quote

import structlog

from fut75.application.dto import CheckoutDTO, OrderItemSpec
from fut75.domain.exceptions import EntityNotFoundError
from fut75.domain.model.cart import Cart, OrderDraft
from fut75.domain.model.order import Order, OrderItem
from fut75.domain.model.value_objects import Quantity, format_phone
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

STORE_NAME = "FUT75 Store"


def render_order_message(draft: OrderDraft) -> str:
    """Plain-text summary: every line with its subtotal, then the total."""
    lines = "\n\n".join(
        f"• {line.product_name}\n"
        f"  Tamanho: {line.size}\n"
        f"  Qtd: {line.quantity}\n"
        f"  Subtotal: {line.line_total}"
        for line in draft.lines
    )
    return (
        f"🛍️ *Novo Pedido - {STORE_NAME}*\n\n"
        f"Cliente: {draft.customer_name}\n"
        f"Telefone: {draft.customer_phone}\n\n"
        f"{lines}\n\n"
        f"💰 *TOTAL: {draft.total}*"
    )


def whatsapp_link(destination: str, message: str) -> str:
    return f"https://wa.me/{destination}?text={quote(message, safe='')}"


class CheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        destination: str,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._destination = destination

    def stage(self, item_specs: list[OrderItemSpec]) -> Cart:
        """Build a cart, one admission check per spec."""
        cart = Cart()
        for spec in item_specs:
            product = self._product_repo.get_by_name(spec.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
            cart.add_item(product, spec.size, spec.quantity)
        return cart

    def handle(self, cart: Cart, customer_name: str, customer_phone: str) -> CheckoutDTO:
        draft = cart.checkout(customer_name, format_phone(customer_phone or ""))

        order = Order.create(
            items=[
                OrderItem(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    size=line.size,
                    quantity=Quantity(line.quantity),
                    unit_price=line.unit_price,
                )
                for line in draft.lines
            ],
            customer_name=draft.customer_name,
            customer_phone=draft.customer_phone,
        )
        self._order_repo.save(order)

        message = render_order_message(draft)
        logger.info(
            "Checkout recorded", order_id=order.id,
            lines=len(draft.lines), total=str(draft.total.amount),
        )
        return CheckoutDTO(
            order_id=order.id,
            total=str(draft.total),
            message=message,
            link=whatsapp_link(self._destination, message),
        )
