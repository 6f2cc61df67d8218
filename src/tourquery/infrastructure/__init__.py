"""Infrastructure layer implementations for tourquery."""

from tourquery.infrastructure.key_builders import DefaultKeyBuilder
from tourquery.infrastructure.stores import InMemoryCacheStore

__all__ = [
    "InMemoryCacheStore",
    "DefaultKeyBuilder",
]
