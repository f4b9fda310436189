"""Application service: category registry maintenance."""

from __future__ import annotations

from fut75.domain.model.category import CategoryRegistry
from fut75.domain.repository.category_repository import CategoryRepository
from fut75.domain.service.keyed_locks import KeyedLocks


class CategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._category_repo = category_repo
        self._locks = locks or KeyedLocks()

    def add(self, name: str) -> str:
        with self._locks.hold(["categories"]):
            registry = CategoryRegistry(self._category_repo.list_all())
            added = registry.add(name)
            self._category_repo.save_all(registry.names)
        return added

    def remove(self, name: str) -> None:
        with self._locks.hold(["categories"]):
            registry = CategoryRegistry(self._category_repo.list_all())
            registry.remove(name.strip())
            self._category_repo.save_all(registry.names)

    def list_all(self) -> list[str]:
        return self._category_repo.list_all()
