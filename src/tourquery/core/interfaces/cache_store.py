"""Cache store interface."""

from collections.abc import Callable, Iterator
from typing import Protocol

from tourquery.core.entities.cache_entry import CacheEntry
from tourquery.core.entities.query_key import QueryKey


class ICacheStore(Protocol):
    """Contract for query cache stores.

    Stores hold one entry per query key. All methods are synchronous:
    the store is only touched from the event loop thread, so no call may
    suspend halfway through a mutation.
    """

    def get(self, key: QueryKey) -> CacheEntry | None:
        """Retrieve the entry for a key.

        Args:
            key: The query key to look up.

        Returns:
            The cache entry, or None if absent.
        """
        ...

    def put(self, entry: CacheEntry) -> None:
        """Replace the entry stored under ``entry.key``.

        Args:
            entry: The complete new entry.
        """
        ...

    def invalidate(self, predicate: Callable[[QueryKey], bool]) -> list[QueryKey]:
        """Mark every entry whose key matches ``predicate`` as stale.

        Args:
            predicate: Key filter, e.g. a domain match.

        Returns:
            The keys that were invalidated.
        """
        ...

    def gc(self) -> int:
        """Evict expired entries that have no observers.

        Returns:
            Number of entries evicted.
        """
        ...

    def add_eviction_listener(self, listener: Callable[[QueryKey], None]) -> None:
        """Register a callback invoked with every evicted key.

        Both expiry sweeps and size-bound evictions are reported.
        """
        ...

    def attach(self, key: QueryKey) -> None:
        """Register an observer of ``key``."""
        ...

    def detach(self, key: QueryKey) -> None:
        """Unregister an observer of ``key``."""
        ...

    def observer_count(self, key: QueryKey) -> int:
        """Return the number of observers attached to ``key``."""
        ...

    def pin(self, key: QueryKey) -> None:
        """Protect ``key`` from eviction while a fetch is in flight."""
        ...

    def unpin(self, key: QueryKey) -> None:
        """Release a protection taken with :meth:`pin`."""
        ...

    def keys(self) -> Iterator[QueryKey]:
        """Iterate over the stored keys."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...
