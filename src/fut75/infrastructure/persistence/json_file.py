"""Shared file helpers for the JSON-backed repositories.

Several CLI processes may share one data directory.  Writers hold a lock
file next to the store for the whole read-modify-write, and a new version
replaces the old one in a single rename, so readers never see half a file.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(file_path) + ".lock")
        self._ensure_file()

    def load(self) -> list:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store's lock file; wrap every load-change-persist cycle."""
        with self._lock:
            yield

    def persist(self, records: list) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(json.dumps(records, indent=2, ensure_ascii=False) + "\n")
            os.replace(tmp_name, self._file_path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self.persist([])
