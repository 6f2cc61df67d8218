"""Core domain layer for tourquery."""

from tourquery.core.entities import (
    CacheConfig,
    CacheEntry,
    QueryKey,
    QueryOptions,
    QueryState,
    QueryStatus,
)
from tourquery.core.interfaces import ICacheStore, IKeyBuilder, IRemoteService

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "QueryKey",
    "QueryOptions",
    "QueryState",
    "QueryStatus",
    "ICacheStore",
    "IKeyBuilder",
    "IRemoteService",
]
