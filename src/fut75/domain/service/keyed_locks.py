"""Keyed mutual exclusion for stock and order read-modify-write cycles.

The repositories offer no multi-row transactions, so two writers that
both read the same ``stock_by_size`` could each pass an admission check
and then overwrite one another.  Every ledger write and lifecycle
transition holds the locks of the products it touches; order handlers
also lock ``order:<id>`` so one order is never transitioned twice at once.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager


class KeyedLocks:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    @contextmanager
    def hold(self, keys: Iterable[str]) -> Iterator[None]:
        """Acquire the locks for *keys* in sorted order.

        Locks are re-entrant, so a handler holding a key may call
        ledger operations that take it again.
        """
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self._lock_for(key))
            yield

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock
