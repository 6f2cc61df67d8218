"""Query definition value object."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_key import QueryKey


@dataclass(frozen=True)
class QueryDefinition:
    """Everything the query client needs to resolve one read.

    Domain modules build definitions from parameters; consumers pass them
    to ``QueryClient.observe`` / ``fetch`` via :meth:`as_args`.
    """

    key: QueryKey
    producer: Callable[[], Awaitable[Any]] = field(compare=False)
    options: QueryOptions = field(default_factory=QueryOptions)

    def as_args(
        self,
    ) -> tuple[QueryKey, Callable[[], Awaitable[Any]], QueryOptions]:
        return self.key, self.producer, self.options
