"""Search state wired through a debouncer into the query client."""

from collections.abc import Callable
from datetime import timedelta
from typing import Generic, TypeVar

from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.results import QueryState
from tourquery.core.services.debounce import Debouncer
from tourquery.core.services.query_client import QueryClient
from tourquery.core.services.query_observer import QueryObserver
from tourquery.core.services.search_state import SearchStateController

P = TypeVar("P")


class DebouncedQuery(Generic[P]):
    """Observes the query for the settled parameters of a search view.

    The initial parameters are queried immediately. Later parameter
    changes pass through a :class:`Debouncer`; only the value that
    survives the quiet period replaces the observed query. Closing the
    debounced query cancels pending timers and detaches the observer.
    """

    def __init__(
        self,
        client: QueryClient,
        controller: SearchStateController[P],
        define: Callable[[P], QueryDefinition],
        delay: timedelta | None = None,
    ) -> None:
        """Initialize and start observing the current parameters.

        Args:
            client: The query client.
            controller: Search state whose parameters drive the query.
            define: Builds the query definition for a parameter set.
            delay: Quiet period. Defaults to ``client.config.debounce_delay``.
        """
        if delay is None:
            delay = client.config.debounce_delay
        self._client = client
        self._define = define
        self._listeners: list[Callable[[QueryState], None]] = []
        self._params = controller.params
        self._observer = self._observe(define(controller.params))
        self._debouncer: Debouncer[P] = Debouncer(
            delay,  # type: ignore[arg-type]
            on_emit=self._on_settled,
        )
        self._unsubscribe = controller.subscribe(self._debouncer.push)
        self._unregister = client.on_shutdown(self.close)
        self._closed = False

    @property
    def params(self) -> P:
        """The settled parameters currently being queried."""
        return self._params

    @property
    def observer(self) -> QueryObserver:
        return self._observer

    @property
    def state(self) -> QueryState:
        return self._observer.state

    def subscribe(self, listener: Callable[[QueryState], None]) -> Callable[[], None]:
        """Register a listener for state changes of the observed query.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait(self) -> QueryState:
        return await self._observer.wait()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Cancel pending timers and detach the observer.

        Called automatically when the client shuts down.
        """
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
        self._unregister()
        self._debouncer.close()
        self._observer.close()
        self._listeners.clear()

    def _on_settled(self, params: P) -> None:
        definition = self._define(params)
        self._params = params
        if (
            self._observer.key == definition.key
            and self._observer.options == definition.options
        ):
            return
        self._observer.close()
        self._observer = self._observe(definition)
        self._forward(self._observer.state)

    def _observe(self, definition: QueryDefinition) -> QueryObserver:
        observer = self._client.observe(*definition.as_args())
        observer.subscribe(self._forward)
        return observer

    def _forward(self, state: QueryState) -> None:
        for listener in list(self._listeners):
            listener(state)

    def __enter__(self) -> "DebouncedQuery[P]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
