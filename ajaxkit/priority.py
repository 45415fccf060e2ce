"""
Priority Registry

Ordered container mapping integer priorities to items. A requested priority
that is already taken is shifted forward to the next free slot, so callers
must not assume their priority is honoured exactly. Iteration is always in
ascending priority, whatever the insertion order. Items are never removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PriorityRegistry(Generic[T]):
    def __init__(self) -> None:
        self._entries: dict[int, T] = {}

    def insert(self, item: T, priority: int) -> int:
        """Insert ``item`` at the first free priority >= ``priority`` and return it."""
        requested = priority
        while priority in self._entries:
            priority += 1
        if priority != requested:
            logger.debug("Priority %d taken, %r slotted at %d", requested, item, priority)
        self._entries[priority] = item
        self._entries = dict(sorted(self._entries.items()))
        return priority

    def priorities(self) -> list[int]:
        return list(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item: object) -> bool:
        return any(entry is item for entry in self._entries.values())
