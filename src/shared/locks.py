"""Per-key mutual exclusion for read-modify-write sequences."""

import threading
from collections import defaultdict
from contextlib import contextmanager


class KeyedLock:
    """Hands out one lock per key, created on first use.

    Entries are reference counted and dropped once no caller holds or waits
    on them, so the table does not grow with the number of distinct keys.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._waiters: defaultdict[str, int] = defaultdict(int)

    @contextmanager
    def hold(self, key: str):
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._waiters[key] += 1
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
