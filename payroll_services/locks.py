"""
Keyed lock registry (``payroll_services.locks``).

Serializes work per key inside one process: two report generations for
the same (employee, year, month) never interleave, while different keys
run freely.  Across processes the report row is also read
``FOR UPDATE`` (PostgreSQL).

The registry is explicit, injected state.  Entries are dropped once no
holder or waiter remains, so the map does not grow with history.
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager


class KeyedLockRegistry:
    """One re-entrant lock per key, reference counted."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, tuple[threading.RLock, int]] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(key, (threading.RLock(), 0))
            self._locks[key] = (lock, users + 1)
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                lock, users = self._locks[key]
                if users <= 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)

    def active_keys(self) -> frozenset:
        """Keys currently held or awaited."""
        with self._guard:
            return frozenset(self._locks)
