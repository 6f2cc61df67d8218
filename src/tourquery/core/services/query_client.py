"""Query client - fetch orchestrator over the cache store."""

import asyncio
import functools
import itertools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from tourquery.core.entities.cache_config import CacheConfig, QueryOptions
from tourquery.core.entities.cache_entry import CacheEntry
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import QueryState, ServiceResponse
from tourquery.core.interfaces.cache_store import ICacheStore
from tourquery.core.services.query_observer import QueryObserver
from tourquery.errors import DomainError, QueryError, TourQueryError, TransportError
from tourquery.infrastructure.stores.memory import InMemoryCacheStore, utc_now

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[Any]]


@dataclass
class _Flight:
    generation: int
    task: "asyncio.Task[None]"


def unwrap_response(result: Any, default_message: str) -> Any:
    """Extract the payload of a producer result.

    ``ServiceResponse`` values are unwrapped; any other value is returned
    as is.

    Raises:
        DomainError: If the service answered with ``success=False``.
    """
    if not isinstance(result, ServiceResponse):
        return result
    if not result.success:
        raise DomainError(result.message or default_message, data=result.data)
    return result.data


class QueryClient:
    """Orchestrates cached reads against remote producers.

    One client is created per application instance and passed explicitly
    to everything that reads or mutates remote data. All methods must be
    called from the event loop that runs the producers.

    Per key the client guarantees:
        - at most one producer call in flight (single-flight); concurrent
          readers attach to the running call;
        - results are applied only if they belong to the newest
          generation of the key, so a superseded call never overwrites
          newer data;
        - data from the last success stays visible while a refetch runs
          and after a failed one.
    """

    def __init__(
        self,
        store: ICacheStore | None = None,
        config: CacheConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the query client.

        Args:
            store: The cache store. An InMemoryCacheStore sized from
                ``config`` is created if not provided.
            config: Optional cache configuration. Uses defaults if not provided.
            clock: Callable returning the current time. Defaults to UTC now.
        """
        self._config = config or CacheConfig()
        self._clock = clock or utc_now
        self._store = store or InMemoryCacheStore(
            maxsize=self._config.max_size,
            gc_interval=self._config.gc_interval,
            clock=self._clock,
        )

        self._in_flight: dict[QueryKey, _Flight] = {}
        self._generations: dict[QueryKey, int] = {}
        self._producers: dict[QueryKey, tuple[Producer, QueryOptions]] = {}
        self._observers: dict[QueryKey, list[QueryObserver]] = {}
        self._next_generation = itertools.count(1)
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False
        self._shutdown_callbacks: list[Callable[[], None]] = []
        self._store.add_eviction_listener(self._forget)

        # Statistics
        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._deduplicated = 0
        self._discarded = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def store(self) -> ICacheStore:
        """Get the cache store."""
        return self._store

    @property
    def stats(self) -> dict[str, int]:
        """Get client statistics.

        Returns:
            Dictionary with hits, misses, fetches started, requests that
            attached to an in-flight fetch, and discarded completions.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "fetches": self._fetches,
            "deduplicated": self._deduplicated,
            "discarded": self._discarded,
        }

    @property
    def closed(self) -> bool:
        return self._closed

    def on_shutdown(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run when the client shuts down.

        Components that schedule work against the client (debounce
        timers, for instance) use this to stop before the client closes.

        Returns:
            A callable that removes the callback.
        """
        self._shutdown_callbacks.append(callback)

        def unregister() -> None:
            if callback in self._shutdown_callbacks:
                self._shutdown_callbacks.remove(callback)

        return unregister

    def is_fetching(self, key: QueryKey) -> bool:
        return key in self._in_flight

    def resolve(
        self,
        key: QueryKey,
        producer: Producer,
        options: QueryOptions | None = None,
    ) -> QueryState:
        """Resolve a query against the cache, starting a fetch if needed.

        Args:
            key: The query key.
            producer: Zero-argument coroutine function performing the
                remote read.
            options: Optional per-query overrides.

        Returns:
            The current state. When a fetch was started or joined the
            status is ``LOADING`` and ``data`` holds any previous payload.
        """
        self._ensure_open()
        options = options or QueryOptions()
        if not self._is_enabled(options):
            return self._idle_state(key)

        entry = self._store.get(key)
        self._producers[key] = (producer, options)
        if entry is not None and not entry.is_stale(self._clock()):
            self._hits += 1
            logger.debug("Cache hit for %s", key)
            return self._snapshot(key, entry)

        self._misses += 1
        logger.debug("Cache %s for %s", "stale" if entry else "miss", key)
        self._start_fetch(key, producer, options)
        return self.get_state(key, options)

    async def fetch(
        self,
        key: QueryKey,
        producer: Producer,
        options: QueryOptions | None = None,
    ) -> QueryState:
        """Resolve a query and wait until it settles.

        Args:
            key: The query key.
            producer: Zero-argument coroutine function performing the
                remote read.
            options: Optional per-query overrides.

        Returns:
            The settled state (``SUCCESS``, ``ERROR`` or ``IDLE`` when
            disabled).
        """
        state = self.resolve(key, producer, options)
        if not state.is_fetching:
            return state
        return await self.wait_for(key, options)

    async def refetch(
        self,
        key: QueryKey,
        producer: Producer | None = None,
        options: QueryOptions | None = None,
        *,
        cancel_in_flight: bool = False,
    ) -> QueryState:
        """Fetch a key regardless of staleness and wait for the result.

        An in-flight fetch is joined unless ``cancel_in_flight`` is set, in
        which case a new generation starts and the running call's result
        will be discarded.

        Args:
            key: The query key.
            producer: Producer to use. Defaults to the last one registered
                for the key.
            options: Optional per-query overrides.
            cancel_in_flight: Supersede a running fetch instead of joining it.

        Returns:
            The settled state.

        Raises:
            TourQueryError: If no producer is known for the key.
        """
        self._ensure_open()
        if producer is None:
            registered = self._producers.get(key)
            if registered is None:
                raise TourQueryError(f"No producer registered for {key}")
            producer, registered_options = registered
            options = options or registered_options
        options = options or QueryOptions()

        self._start_fetch(key, producer, options, cancel_in_flight=cancel_in_flight)
        self._producers[key] = (producer, options)
        return await self.wait_for(key, options)

    async def wait_for(
        self,
        key: QueryKey,
        options: QueryOptions | None = None,
    ) -> QueryState:
        """Wait until no fetch is in flight for ``key``.

        Follows newer generations started while waiting. Cancelling the
        waiter does not cancel the shared fetch.
        """
        while (flight := self._in_flight.get(key)) is not None:
            await asyncio.wait({flight.task})
            if flight.task.cancelled() and self._in_flight.get(key) is flight:
                break
        return self.get_state(key, options)

    def observe(
        self,
        key: QueryKey,
        producer: Producer,
        options: QueryOptions | None = None,
    ) -> QueryObserver:
        """Create an observer for a query and resolve it once.

        The observer holds the key in the store until it is closed.

        Args:
            key: The query key.
            producer: Zero-argument coroutine function performing the
                remote read.
            options: Optional per-query overrides.

        Returns:
            A subscribable QueryObserver.
        """
        self._ensure_open()
        options = options or QueryOptions()
        observer = QueryObserver(self, key, producer, options)
        self._observers.setdefault(key, []).append(observer)
        self._store.attach(key)
        observer.resolve()
        return observer

    def get_state(
        self,
        key: QueryKey,
        options: QueryOptions | None = None,
    ) -> QueryState:
        """Return the current state of a key without fetching."""
        if options is not None and not self._is_enabled(options):
            return self._idle_state(key)
        entry = self._store.get(key)
        if entry is None:
            return QueryState(
                key=key,
                is_fetching=self.is_fetching(key),
                refetch=functools.partial(self.refetch, key),
            )
        return self._snapshot(key, entry)

    def get_query_data(self, key: QueryKey) -> Any:
        """Return the cached payload for a key, or None."""
        entry = self._store.get(key)
        return entry.data if entry is not None else None

    def invalidate(
        self,
        predicate: Callable[[QueryKey], bool],
        refetch_active: bool = True,
    ) -> list[QueryKey]:
        """Mark matching entries stale.

        Keys with observers (when ``refetch_active``) and keys with a fetch
        in flight are refetched immediately; a running fetch is superseded
        so that a result started before the invalidation is discarded.

        Args:
            predicate: Key filter.
            refetch_active: Refetch observed keys right away.

        Returns:
            The invalidated keys.
        """
        keys = self._store.invalidate(predicate)
        for key in keys:
            registered = self._producers.get(key)
            observed = self._store.observer_count(key) > 0
            if registered is not None and (
                self.is_fetching(key) or (refetch_active and observed)
            ):
                producer, options = registered
                self._start_fetch(key, producer, options, cancel_in_flight=True)
            else:
                self._notify(key)

        logger.debug("Invalidated %d cache entries", len(keys))
        return keys

    def invalidate_domain(self, domain: str, *scope: str) -> list[QueryKey]:
        """Invalidate every entry under ``domain`` (and optional scope)."""
        return self.invalidate(lambda key: key.matches(domain, *scope))

    async def shutdown(self) -> None:
        """Run shutdown callbacks, cancel in-flight work and clear all state."""
        if self._closed:
            return
        self._closed = True

        for callback in list(self._shutdown_callbacks):
            callback()
        self._shutdown_callbacks.clear()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        for observers in list(self._observers.values()):
            for observer in list(observers):
                observer.close()

        self._in_flight.clear()
        self._generations.clear()
        self._producers.clear()
        self._observers.clear()
        self._store.clear()
        logger.debug("Query client shut down, %d fetches cancelled", len(tasks))

    async def __aenter__(self) -> "QueryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()

    def _start_fetch(
        self,
        key: QueryKey,
        producer: Producer,
        options: QueryOptions,
        cancel_in_flight: bool = False,
    ) -> _Flight:
        flight = self._in_flight.get(key)
        if flight is not None and not cancel_in_flight:
            self._deduplicated += 1
            logger.debug("Joining in-flight fetch for %s", key)
            return flight

        loop = asyncio.get_running_loop()
        self._store.pin(key)
        stale_after, retain_for = self._durations(options)
        entry = self._store.get(key) or CacheEntry.create(
            key, self._clock(), stale_after, retain_for
        )
        self._store.put(entry.with_loading())

        generation = next(self._next_generation)
        self._generations[key] = generation

        task = loop.create_task(self._run(key, generation, producer, options))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        flight = _Flight(generation=generation, task=task)
        self._in_flight[key] = flight
        self._fetches += 1
        logger.debug("Started fetch for %s (generation %d)", key, generation)

        self._notify(key)
        return flight

    async def _run(
        self,
        key: QueryKey,
        generation: int,
        producer: Producer,
        options: QueryOptions,
    ) -> None:
        default_message = options.error_message or f"Failed to fetch {key.domain}"
        try:
            data: Any = None
            error: QueryError | None = None
            try:
                data = unwrap_response(await producer(), default_message)
            except DomainError as e:
                logger.info("Fetch for %s reported failure: %s", key, e.message)
                error = e
            except Exception as e:
                logger.warning("Fetch for %s failed: %s", key, e)
                error = TransportError()
                error.__cause__ = e

            self._settle(key, generation, data, error, options)
        finally:
            self._store.unpin(key)
            current = self._in_flight.get(key)
            if current is not None and current.generation == generation:
                del self._in_flight[key]

    def _settle(
        self,
        key: QueryKey,
        generation: int,
        data: Any,
        error: QueryError | None,
        options: QueryOptions,
    ) -> None:
        if self._generations.get(key) != generation:
            self._discarded += 1
            logger.debug(
                "Discarding superseded result for %s (generation %d)", key, generation
            )
            return

        now = self._clock()
        stale_after, retain_for = self._durations(options)
        entry = self._store.get(key) or CacheEntry.create(
            key, now, stale_after, retain_for
        )
        if error is None:
            entry = entry.with_success(data, now, stale_after, retain_for)
        else:
            entry = entry.with_error(error, now, retain_for)

        self._store.put(entry)
        self._in_flight.pop(key, None)
        self._notify(key)

    def _forget(self, key: QueryKey) -> None:
        if key in self._in_flight or key in self._observers:
            return
        self._producers.pop(key, None)
        self._generations.pop(key, None)

    def _detach(self, observer: QueryObserver) -> None:
        observers = self._observers.get(observer.key)
        if observers and observer in observers:
            observers.remove(observer)
            if not observers:
                del self._observers[observer.key]
            self._store.detach(observer.key)

    def _notify(self, key: QueryKey) -> None:
        observers = self._observers.get(key)
        if not observers:
            return
        for observer in list(observers):
            observer._notify(observer.state)

    def _snapshot(self, key: QueryKey, entry: CacheEntry) -> QueryState:
        return QueryState.from_entry(
            entry,
            now=self._clock(),
            is_fetching=self.is_fetching(key),
            refetch=functools.partial(self.refetch, key),
        )

    def _idle_state(self, key: QueryKey) -> QueryState:
        return QueryState(
            key=key,
            is_stale=False,
            refetch=functools.partial(self.refetch, key),
        )

    def _is_enabled(self, options: QueryOptions) -> bool:
        return self._config.enabled and options.enabled

    def _durations(self, options: QueryOptions) -> tuple[timedelta, timedelta]:
        stale_after = options.stale_after
        if stale_after is None:
            stale_after = self._config.default_stale_after
        retain_for = options.retain_for
        if retain_for is None:
            retain_for = self._config.default_retain_for
        return stale_after, retain_for  # type: ignore[return-value]

    def _ensure_open(self) -> None:
        if self._closed:
            raise TourQueryError("QueryClient has been shut down")
