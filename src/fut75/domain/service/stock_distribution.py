"""Domain service: stock distribution check for product registration."""

from __future__ import annotations

from collections.abc import Mapping

from fut75.domain.exceptions import StockMismatch


def validate_distribution(declared_total: int, allocation: Mapping[str, int]) -> int:
    """Return the allocated total, or raise StockMismatch if it differs."""
    allocated = sum(allocation.values())
    if allocated != declared_total:
        raise StockMismatch(declared_total, allocated)
    return allocated
