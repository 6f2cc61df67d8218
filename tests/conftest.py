"""Pytest configuration for tourquery tests."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from tourquery import CacheConfig, InMemoryCacheStore, QueryClient


class FakeClock:
    """Manually advanced clock for staleness and retention tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class ControlledProducer:
    """Producer whose calls complete only when the test settles them."""

    def __init__(self) -> None:
        self.calls = 0
        self._futures: list[asyncio.Future[Any]] = []

    async def __call__(self) -> Any:
        self.calls += 1
        future = asyncio.get_running_loop().create_future()
        self._futures.append(future)
        return await future

    async def started(self, count: int) -> None:
        """Yield to the loop until ``count`` calls are waiting."""
        for _ in range(50):
            if len(self._futures) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} producer calls, got {self.calls}")

    def succeed(self, index: int, value: Any) -> None:
        self._futures[index].set_result(value)

    def fail(self, index: int, error: Exception) -> None:
        self._futures[index].set_exception(error)


async def _drain() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(
        maxsize=100,
        gc_interval=timedelta(minutes=1),
        clock=clock,
    )


@pytest.fixture
def client(store: InMemoryCacheStore, clock: FakeClock) -> QueryClient:
    """Create a query client with a controllable clock."""
    return QueryClient(store=store, config=CacheConfig(), clock=clock)


@pytest.fixture
def producer() -> ControlledProducer:
    return ControlledProducer()


@pytest.fixture
def producer_factory() -> type[ControlledProducer]:
    return ControlledProducer


@pytest.fixture
def drain():
    """Coroutine function letting pending callbacks and task steps run."""
    return _drain
