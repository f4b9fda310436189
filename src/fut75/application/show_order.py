"""Application service: Show Order and List Orders use cases (queries).

Orders are numbered for display by ascending creation time, starting
at 1; lists show the most recent first.
"""

from __future__ import annotations

from fut75.application.dto import OrderDTO, OrderItemDTO, OrderSummaryDTO
from fut75.domain.exceptions import EntityNotFoundError, ValidationError
from fut75.domain.model.order import Order, OrderStatus
from fut75.domain.repository.order_repository import OrderRepository

_TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


def sequence_numbers(orders: list[Order]) -> dict[str, int]:
    """Order ID -> 1-based rank by creation time."""
    ranked = sorted(orders, key=lambda o: (o.created_at, o.id))
    return {order.id: i for i, order in enumerate(ranked, start=1)}


def to_order_dto(order: Order, sequence: int) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        sequence=sequence,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_name=item.product_name,
                size=item.size,
                quantity=item.quantity.value,
                returned_quantity=item.returned_quantity,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total_value),
        created_at=order.created_at.strftime(_TIME_FORMAT),
    )


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        sequence = sequence_numbers(self._order_repo.list_all())
        return to_order_dto(order, sequence.get(order.id, 0))


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderSummaryDTO]:
        orders = self._order_repo.list_all()
        sequence = sequence_numbers(orders)

        if status is not None:
            try:
                wanted = OrderStatus(status)
            except ValueError as exc:
                raise ValidationError(f"Unknown order status '{status}'") from exc
            orders = [o for o in orders if o.status == wanted]

        orders.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        return [
            OrderSummaryDTO(
                id=o.id,
                sequence=sequence[o.id],
                customer_name=o.customer_name,
                status=o.status.value,
                item_count=sum(item.quantity.value for item in o.items),
                total=str(o.total_value),
                created_at=o.created_at.strftime(_TIME_FORMAT),
            )
            for o in orders
        ]
