"""Subscribable view of a single query."""

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import QueryState

if TYPE_CHECKING:
    from tourquery.core.services.query_client import QueryClient

logger = logging.getLogger(__name__)

Listener = Callable[[QueryState], None]


class QueryObserver:
    """Observable state of one query for one consumer.

    An observer keeps its key alive in the store (no garbage collection
    while attached) and forwards every state change of the key to its
    listeners. After :meth:`close` no listener is called again, even if a
    fetch started on its behalf completes later.
    """

    def __init__(
        self,
        client: "QueryClient",
        key: QueryKey,
        producer: Callable[[], Awaitable[Any]],
        options: QueryOptions,
    ) -> None:
        self._client = client
        self._key = key
        self._producer = producer
        self._options = options
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def key(self) -> QueryKey:
        return self._key

    @property
    def options(self) -> QueryOptions:
        return self._options

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> QueryState:
        """Current state of the query, without triggering a fetch."""
        return self._client.get_state(self._key, self._options)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes.

        Args:
            listener: Called with the new QueryState on every change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def resolve(self) -> QueryState:
        """Resolve the query through the client, fetching if needed."""
        return self._client.resolve(self._key, self._producer, self._options)

    async def wait(self) -> QueryState:
        """Wait for any in-flight fetch of the key and return the result."""
        return await self._client.wait_for(self._key, self._options)

    async def refetch(self, *, cancel_in_flight: bool = False) -> QueryState:
        """Force a fetch of the key regardless of staleness."""
        return await self._client.refetch(
            self._key,
            self._producer,
            self._options,
            cancel_in_flight=cancel_in_flight,
        )

    def close(self) -> None:
        """Detach from the client; no further notifications are delivered."""
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        self._client._detach(self)

    def _notify(self, state: QueryState) -> None:
        if self._closed:
            return
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Query listener failed for %s", self._key)

    def __enter__(self) -> "QueryObserver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "QueryObserver":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
