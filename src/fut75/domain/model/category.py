"""Category registry.

A plain list of names; products are validated against a snapshot of it
taken by the caller, never against module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fut75.domain.exceptions import DuplicateCategory, ValidationError


@dataclass
class CategoryRegistry:
    names: list[str] = field(default_factory=list)

    def add(self, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Category name is required")
        if name in self.names:
            raise DuplicateCategory(f"Category '{name}' already exists")
        self.names.append(name)
        return name

    def remove(self, name: str) -> None:
        self.names = [n for n in self.names if n != name]

    def require(self, name: str) -> str:
        name = name.strip()
        if name not in self.names:
            raise ValidationError(f"Unknown category '{name}'")
        return name
