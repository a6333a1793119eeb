"""Per-key serialization for read-modify-write sequences."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager


class KeyedLocks:
    """Registry of one lock per key (player id, territory id, ...).

    Requests touching the same keys run one at a time; unrelated keys proceed
    in parallel.  Keys are always acquired in sorted order so two requests
    sharing a pair of keys cannot deadlock.

    Locks are created on first use and never pruned, so the registry holds one
    lock per distinct key ever seen.  Keys are player and territory ids, which
    bounds it by the size of the world.  Locks are not reentrant.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self._lock_for(key))
            yield
