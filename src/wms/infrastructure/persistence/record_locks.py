"""Keyed lock registry used by the stores to serialize per-record updates."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterable, Iterator
from contextlib import ExitStack, contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0


class RecordLocks:
    """One reentrant lock per key, created on demand.

    Several keys are always acquired in sorted order, so two callers
    locking overlapping key sets cannot deadlock each other.  A key's lock
    is dropped once nobody holds or waits for it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, keys: Iterable[Hashable]) -> Iterator[None]:
        ordered = sorted(set(keys))
        with self._guard:
            entries = [self._entries.setdefault(key, _Entry()) for key in ordered]
            for entry in entries:
                entry.users += 1
        try:
            with ExitStack() as stack:
                for entry in entries:
                    stack.enter_context(entry.lock)
                yield
        finally:
            with self._guard:
                for key, entry in zip(ordered, entries):
                    entry.users -= 1
                    if not entry.users:
                        del self._entries[key]
