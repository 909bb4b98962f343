"""Process-wide cache of synthesized value types, keyed by format."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from fixlib.core.format import FormatDescriptor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SynthesisCache(Generic[T]):
    """Maps each :class:`FormatDescriptor` to the handle synthesized for it.

    The cache starts empty, only grows, and never evicts. Hits are served
    without taking a lock. On a miss the caller takes a lock private to that
    descriptor, so concurrent requests for one format run the factory once
    while requests for other formats are not held up. A factory that raises
    leaves the cache unchanged.
    """

    def __init__(self) -> None:
        self._entries: dict[FormatDescriptor, T] = {}
        # descriptor -> [lock, number of callers waiting on or holding it]
        self._locks: dict[FormatDescriptor, list] = {}
        self._guard = threading.Lock()
        self._synthesized = 0

    def get_or_create(self, descriptor: FormatDescriptor, factory: Callable[[FormatDescriptor], T]) -> T:
        """Return the cached handle for *descriptor*, running *factory* on first use.

        The per-descriptor lock lives only while some caller holds or waits on
        it, so failed factories leave nothing behind in the lock table.
        """
        entry = self._entries.get(descriptor)
        if entry is not None:
            return entry

        with self._guard:
            slot = self._locks.setdefault(descriptor, [threading.Lock(), 0])
            slot[1] += 1
        try:
            with slot[0]:
                entry = self._entries.get(descriptor)
                if entry is not None:
                    return entry
                entry = factory(descriptor)
                with self._guard:
                    self._entries[descriptor] = entry
                    self._synthesized += 1
                logger.debug("Synthesized value type for %s", descriptor)
                return entry
        finally:
            with self._guard:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._locks[descriptor]

    def get(self, descriptor: FormatDescriptor) -> T | None:
        return self._entries.get(descriptor)

    @property
    def synthesized(self) -> int:
        """Number of factory runs that completed successfully."""
        return self._synthesized

    def descriptors(self) -> list[FormatDescriptor]:
        with self._guard:
            return list(self._entries)

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._entries

    def __len__(self) -> int:
        return len(self._entries)
