"""Size labels and their display order.

Sizes carry no stock semantics here; this module only decides how labels
are ranked for display and which labels a new product starts with.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable

CANONICAL_SIZES: tuple[str, ...] = ("PP", "P", "M", "G", "GG", "XG")
ONE_SIZE = "U"
STANDARD_SIZES: tuple[str, ...] = ("P", "M", "G", "GG")

ONE_SIZE_CATEGORIES = frozenset({"bone", "meia", "relogio"})
APPAREL_CATEGORIES = frozenset({"camisa", "casaco", "regata"})

_RANK = {label: i for i, label in enumerate(CANONICAL_SIZES)}


def rank(label: str) -> int:
    """Position of *label* in the canonical order; unknown labels go last."""
    return _RANK.get(label, len(CANONICAL_SIZES))


def sort_sizes(labels: Iterable[str]) -> list[str]:
    return sorted(labels, key=lambda label: (rank(label), label))


def normalize_category(name: str) -> str:
    """Lower-case and strip accents, so "Relógio" matches "relogio"."""
    decomposed = unicodedata.normalize("NFD", name.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def default_sizes_for(category: str) -> list[str]:
    key = normalize_category(category)
    if key in ONE_SIZE_CATEGORIES:
        return [ONE_SIZE]
    if key in APPAREL_CATEGORIES:
        return list(CANONICAL_SIZES)
    return list(STANDARD_SIZES)
