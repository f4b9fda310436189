"""Abstract repository for the category registry."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CategoryRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[str]:
        """Return every category name, in registration order."""

    @abstractmethod
    def save_all(self, categories: list[str]) -> None:
        """Replace the registry with *categories*."""
