"""Application service: Create Order use case (admin console).

Resolves product names, stages every line through the AdminOrderBuilder
(which enforces stock admission), then submits with or without an
immediate stock debit.
"""

from __future__ import annotations

from fut75.application.dto import OrderDTO, OrderItemSpec
from fut75.application.show_order import sequence_numbers, to_order_dto
from fut75.domain.exceptions import EntityNotFoundError
from fut75.domain.repository.order_repository import OrderRepository
from fut75.domain.repository.product_repository import ProductRepository
from fut75.domain.service.admin_order_builder import AdminOrderBuilder
from fut75.domain.service.stock_ledger import StockLedger


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(
        self,
        item_specs: list[OrderItemSpec],
        debit_stock_immediately: bool = False,
        customer_name: str | None = None,
        customer_phone: str | None = None,
    ) -> OrderDTO:
        """Create an order from the admin console.

        Steps:
        1. Resolve each product name to a Product (fail if not found).
        2. Stage lines with *current* prices; admission rejects overselling.
        3. Submit: ``completed`` with stock taken, or ``pending`` without.
        4. Return a DTO.
        """
        builder = AdminOrderBuilder(self._product_repo, self._order_repo, self._ledger)

        for spec in item_specs:
            product = self._product_repo.get_by_name(spec.product_name)
            if product is None:
                raise EntityNotFoundError(
                    f"Product not found: '{spec.product_name}'"
                )
            builder.add_line(product.id, spec.size, spec.quantity)

        order = builder.submit(
            debit_stock_immediately,
            customer_name=customer_name,
            customer_phone=customer_phone,
        )
        sequence = sequence_numbers(self._order_repo.list_all())
        return to_order_dto(order, sequence.get(order.id, 0))
