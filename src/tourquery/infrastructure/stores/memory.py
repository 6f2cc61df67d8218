"""In-memory cache store implementation."""

import logging
from collections import Counter
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone

from cachetools import LRUCache  # type: ignore[import-untyped]

from tourquery.core.entities.cache_entry import CacheEntry
from tourquery.core.entities.query_key import QueryKey

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _EvictingLRUCache(LRUCache):
    """LRUCache that reports entries dropped to make room."""

    def __init__(self, maxsize: int, on_evict: Callable[[QueryKey], None]) -> None:
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self) -> tuple[QueryKey, CacheEntry]:
        key, entry = super().popitem()
        self._on_evict(key)
        return key, entry


class InMemoryCacheStore:
    """In-memory query cache store with observer-aware garbage collection.

    Suitable for a single application instance. Uses a cachetools
    LRUCache to bound the number of entries; the least recently used entry
    is dropped when ``maxsize`` is exceeded. Expired entries are collected
    lazily: ``get`` and ``put`` sweep the store when ``gc_interval`` has
    elapsed since the previous sweep.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        gc_interval: timedelta = timedelta(minutes=1),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the in-memory cache store.

        Args:
            maxsize: Maximum number of entries in the store.
            gc_interval: Minimum time between lazy garbage collections.
            clock: Callable returning the current time. Defaults to UTC now.
        """
        self._maxsize = maxsize
        self._gc_interval = gc_interval
        self._clock = clock or utc_now
        self._entries: LRUCache[QueryKey, CacheEntry] = _EvictingLRUCache(
            maxsize, on_evict=self._evicted
        )
        self._observers: Counter[QueryKey] = Counter()
        self._pinned: Counter[QueryKey] = Counter()
        self._last_gc = self._clock()
        self._eviction_listeners: list[Callable[[QueryKey], None]] = []

    def get(self, key: QueryKey) -> CacheEntry | None:
        """Retrieve the entry for a key.

        Args:
            key: The query key to look up.

        Returns:
            The cache entry, or None if absent.
        """
        self._maybe_gc()
        return self._entries.get(key)

    def put(self, entry: CacheEntry) -> None:
        """Replace the entry stored under ``entry.key``.

        Entries are immutable, so readers holding the previous entry never
        observe a partially updated one.

        Args:
            entry: The complete new entry.
        """
        self._entries[entry.key] = entry
        self._maybe_gc()

    def invalidate(self, predicate: Callable[[QueryKey], bool]) -> list[QueryKey]:
        """Mark every entry whose key matches ``predicate`` as stale.

        Entries are kept so their data can still be shown while the
        refetch runs.

        Args:
            predicate: Key filter, e.g. a domain match.

        Returns:
            The keys that were invalidated.
        """
        matched = [key for key in list(self._entries.keys()) if predicate(key)]
        for key in matched:
            self._entries[key] = self._entries[key].with_invalidated()
        return matched

    def gc(self) -> int:
        """Evict expired entries that have no observers.

        Returns:
            Number of entries evicted.
        """
        now = self._clock()
        self._last_gc = now

        expired = [
            key
            for key, entry in list(self._entries.items())
            if entry.is_expired(now)
            and self._observers[key] == 0
            and self._pinned[key] == 0
        ]
        for key in expired:
            del self._entries[key]
            self._evicted(key)

        if expired:
            logger.debug("Garbage-collected %d cache entries", len(expired))
        return len(expired)

    def add_eviction_listener(self, listener: Callable[[QueryKey], None]) -> None:
        """Call ``listener`` with every key dropped by gc or by the size bound."""
        self._eviction_listeners.append(listener)

    def attach(self, key: QueryKey) -> None:
        """Register an observer of ``key``."""
        self._observers[key] += 1

    def detach(self, key: QueryKey) -> None:
        """Unregister an observer of ``key``.

        When the last observer leaves, the entry's retention window
        restarts from now.
        """
        if self._observers[key] <= 0:
            return
        self._observers[key] -= 1
        if self._observers[key] == 0:
            del self._observers[key]
            entry = self._entries.get(key)
            if entry is not None:
                self._entries[key] = entry.with_retention(self._clock())

    def observer_count(self, key: QueryKey) -> int:
        """Return the number of observers attached to ``key``."""
        return self._observers.get(key, 0)

    def pin(self, key: QueryKey) -> None:
        """Protect ``key`` from garbage collection."""
        self._pinned[key] += 1

    def unpin(self, key: QueryKey) -> None:
        """Release a protection taken with :meth:`pin`."""
        if self._pinned[key] <= 1:
            self._pinned.pop(key, None)
        else:
            self._pinned[key] -= 1

    def keys(self) -> Iterator[QueryKey]:
        """Iterate over a snapshot of the stored keys."""
        return iter(list(self._entries.keys()))

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()
        self._observers.clear()
        self._pinned.clear()

    def _evicted(self, key: QueryKey) -> None:
        for listener in self._eviction_listeners:
            listener(key)

    def _maybe_gc(self) -> None:
        if self._clock() - self._last_gc >= self._gc_interval:
            self.gc()

    def __len__(self) -> int:
        """Return the number of entries in the store."""
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize
