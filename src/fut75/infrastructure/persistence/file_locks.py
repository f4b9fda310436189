"""Keyed locks that also exclude other processes sharing the data directory."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

from fut75.domain.service.keyed_locks import KeyedLocks


class FileKeyedLocks(KeyedLocks):
    """Per-key thread locks inside one lock file for the whole directory.

    Every CLI command is its own process, so thread locks alone cannot
    keep two ``order confirm`` runs from reading the same stock.  The
    directory lock is taken first and is re-entrant, so nested ``hold()``
    calls from ledger operations inside a handler do not block.
    """

    def __init__(self, lock_path: Path) -> None:
        super().__init__()
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(str(lock_path))

    @contextmanager
    def hold(self, keys: Iterable[str]) -> Iterator[None]:
        keys = list(keys)
        with self._file_lock:
            with super().hold(keys):
                yield
