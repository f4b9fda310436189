"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from fut75.domain.model.order import Order, OrderItem, OrderStatus
from fut75.domain.model.value_objects import CURRENCY, Money, Quantity
from fut75.domain.repository.order_repository import OrderRepository
from fut75.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

            self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_name": order.customer_name,
            "customer_phone": order.customer_phone,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "total_value": str(order.total_value.amount),
            "currency": order.total_value.currency,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "size": item.size,
                    "quantity": item.quantity.value,
                    "returned_quantity": item.returned_quantity,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", CURRENCY)
        items = [
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                size=i["size"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                returned_quantity=i.get("returned_quantity", 0),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_name=raw["customer_name"],
            customer_phone=raw["customer_phone"],
            items=items,
            total_value=Money(Decimal(raw["total_value"]), currency),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
