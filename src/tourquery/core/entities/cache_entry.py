"""Cache entry entity."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from tourquery.core.entities.query_key import QueryKey


class QueryStatus(str, Enum):
    """Lifecycle status of a cached read."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Staleness and retention are independent: ``stale_after`` decides
    whether a read refetches, ``retain_until`` decides when an unobserved
    entry may be garbage-collected. Data from the last success survives
    later loading and error states.
    """

    key: QueryKey
    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    error: Exception | None = None
    fetched_at: datetime | None = None
    stale_after: timedelta = timedelta(0)
    retain_for: timedelta = timedelta(minutes=5)
    retain_until: datetime | None = None
    invalidated: bool = False

    @property
    def has_data(self) -> bool:
        """Whether a successful payload has ever been stored."""
        return self.fetched_at is not None

    def is_stale(self, now: datetime) -> bool:
        """Check whether a read at ``now`` should trigger a refetch.

        Args:
            now: The current time.

        Returns:
            True if the entry was invalidated, never succeeded, or is
            older than ``stale_after``.
        """
        if self.invalidated or self.fetched_at is None:
            return True
        return now - self.fetched_at >= self.stale_after

    def is_expired(self, now: datetime) -> bool:
        """Check whether the retention window has elapsed."""
        if self.retain_until is None:
            return False
        return now >= self.retain_until

    def with_loading(self) -> "CacheEntry":
        return replace(self, status=QueryStatus.LOADING)

    def with_retention(self, now: datetime) -> "CacheEntry":
        return replace(self, retain_until=now + self.retain_for)

    def with_invalidated(self) -> "CacheEntry":
        return replace(self, invalidated=True)

    def with_success(
        self,
        data: Any,
        now: datetime,
        stale_after: timedelta,
        retain_for: timedelta,
    ) -> "CacheEntry":
        return replace(
            self,
            status=QueryStatus.SUCCESS,
            data=data,
            error=None,
            fetched_at=now,
            stale_after=stale_after,
            retain_for=retain_for,
            retain_until=now + retain_for,
            invalidated=False,
        )

    def with_error(
        self,
        error: Exception,
        now: datetime,
        retain_for: timedelta,
    ) -> "CacheEntry":
        return replace(
            self,
            status=QueryStatus.ERROR,
            error=error,
            retain_for=retain_for,
            retain_until=now + retain_for,
        )

    @classmethod
    def create(
        cls,
        key: QueryKey,
        now: datetime,
        stale_after: timedelta,
        retain_for: timedelta,
    ) -> "CacheEntry":
        """Factory method for the first read of a key.

        Args:
            key: The query key.
            now: The current time.
            stale_after: Freshness window for successful data.
            retain_for: Retention window for the unobserved entry.

        Returns:
            A new idle CacheEntry.
        """
        return cls(
            key=key,
            stale_after=stale_after,
            retain_for=retain_for,
            retain_until=now + retain_for,
        )
