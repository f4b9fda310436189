"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Settings come from the environment:

- ``FUT75_DATA_DIR``: directory holding the JSON files (default: ``data/``
  at the project root).
- ``FUT75_WHATSAPP_NUMBER``: destination of checkout messages.
"""

from __future__ import annotations

import os
from pathlib import Path

from fut75.domain.service.keyed_locks import KeyedLocks
from fut75.domain.service.stock_ledger import StockLedger
from fut75.infrastructure.persistence.file_locks import FileKeyedLocks
from fut75.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from fut75.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from fut75.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_WHATSAPP_NUMBER = "5575981284738"

# One lock table per data directory, shared by every ledger and handler.
_LOCKS: dict[Path, KeyedLocks] = {}


def data_dir() -> Path:
    return Path(os.environ.get("FUT75_DATA_DIR", _DEFAULT_DATA_DIR))


def whatsapp_number() -> str:
    return os.environ.get("FUT75_WHATSAPP_NUMBER", DEFAULT_WHATSAPP_NUMBER)


def locks() -> KeyedLocks:
    directory = data_dir().resolve()
    if directory not in _LOCKS:
        _LOCKS[directory] = FileKeyedLocks(directory / ".fut75.lock")
    return _LOCKS[directory]


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(data_dir() / "orders.json")


def category_repository() -> JsonCategoryRepository:
    return JsonCategoryRepository(data_dir() / "categories.json")


def stock_ledger() -> StockLedger:
    return StockLedger(product_repository(), locks())
