"""Debounced trigger for rapidly changing input."""

import asyncio
import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Debouncer(Generic[T]):
    """Emits the latest pushed value once input has settled.

    Every :meth:`push` cancels the pending emission and restarts the
    timer. When ``delay`` passes without a newer value, the value is
    emitted: stored in :attr:`value` and handed to ``on_emit`` and
    subscribers. Timers run on the event loop via ``call_later``.

    Example:
        debouncer = Debouncer(timedelta(milliseconds=300), on_emit=search)
        debouncer.push("cas")
        debouncer.push("casa")  # only "casa" reaches search()
    """

    def __init__(
        self,
        delay: timedelta,
        on_emit: Callable[[T], None] | None = None,
    ) -> None:
        """Initialize the debouncer.

        Args:
            delay: Quiet period required before a value is emitted.
            on_emit: Optional callback receiving each emitted value.
        """
        if delay < timedelta(0):
            raise ValueError("delay must not be negative")
        self._delay = delay
        self._listeners: list[Callable[[T], None]] = []
        if on_emit is not None:
            self._listeners.append(on_emit)
        self._value: object = _UNSET
        self._pending: object = _UNSET
        self._handle: asyncio.TimerHandle | None = None
        self._closed = False

    @property
    def delay(self) -> timedelta:
        return self._delay

    @property
    def value(self) -> T | None:
        """The last emitted value, or None before the first emission."""
        return None if self._value is _UNSET else self._value  # type: ignore[return-value]

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    @property
    def pending(self) -> bool:
        """Whether an emission is scheduled."""
        return self._handle is not None

    def push(self, value: T) -> None:
        """Schedule ``value`` for emission, superseding any pending one."""
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self._cancel_timer()
        self._pending = value
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay.total_seconds(), self._emit)

    def flush(self) -> None:
        """Emit the pending value immediately, if any."""
        if self._handle is not None:
            self._cancel_timer()
            self._emit()

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register a listener for emitted values.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Cancel any pending emission; nothing is emitted afterwards."""
        self._closed = True
        self._cancel_timer()
        self._pending = _UNSET
        self._listeners.clear()

    def _emit(self) -> None:
        self._handle = None
        if self._closed or self._pending is _UNSET:
            return
        value = self._pending
        self._pending = _UNSET
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)  # type: ignore[arg-type]
            except Exception:
                logger.exception("Debounce listener failed")

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def __enter__(self) -> "Debouncer[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
