"""Cache store implementations."""

from tourquery.infrastructure.stores.memory import InMemoryCacheStore

__all__ = ["InMemoryCacheStore"]
