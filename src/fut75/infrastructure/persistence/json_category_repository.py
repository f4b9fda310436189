"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from pathlib import Path

from fut75.domain.repository.category_repository import CategoryRepository
from fut75.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def list_all(self) -> list[str]:
        return [str(name) for name in self._file.load()]

    def save_all(self, categories: list[str]) -> None:
        with self._file.locked():
            self._file.persist(list(categories))
