"""Decorators routing plain coroutine functions through the query layer.

Unlike module-level configuration, both decorators take the client or
executor explicitly, so several application instances can coexist.
"""

import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import MutationResult
from tourquery.core.services.mutation_executor import MutationExecutor
from tourquery.core.services.query_client import QueryClient

R = TypeVar("R")


def cached(
    client: QueryClient,
    domain: str,
    *scope: str,
    options: QueryOptions | None = None,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[Any]]]:
    """Decorator resolving an async read through the query client.

    The query key is built from ``domain``, ``scope`` (defaulting to the
    function name) and the call's bound arguments. Concurrent calls with
    equal arguments share one underlying call.

    Args:
        client: The query client.
        domain: The data domain of the read.
        *scope: Scope segments. Defaults to the function name.
        options: Optional per-query overrides.

    Returns:
        Decorator producing a coroutine function that returns the payload
        and raises the QueryError of a failed read.

    Example:
        @cached(client, "hotels", "detail", options=QueryOptions(
            stale_after=timedelta(minutes=10)))
        async def get_hotel(hotel_id: str) -> ServiceResponse:
            return await api.get_hotel(hotel_id)
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[Any]]:
        signature = inspect.signature(func)
        key_scope = scope or (func.__name__,)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            key = _build_call_key(signature, domain, key_scope, args, kwargs)
            state = await client.fetch(
                key, functools.partial(func, *args, **kwargs), options
            )
            if state.error is not None and state.is_error:
                raise state.error
            return state.data

        return wrapper

    return decorator


def invalidates(
    executor: MutationExecutor,
    domain: str,
    error_message: str | None = None,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[MutationResult]]]:
    """Decorator running an async write through the mutation executor.

    The decorated function runs exactly once per call; on success every
    cached read of ``domain`` is invalidated.

    Args:
        executor: The mutation executor.
        domain: The domain affected by the write.
        error_message: Message for failures reported without one.

    Returns:
        Decorator producing a coroutine function that returns a
        MutationResult.

    Example:
        @invalidates(executor, "hotels")
        async def book(booking: HotelBooking) -> ServiceResponse:
            return await api.book_hotel(booking)
    """

    def decorator(
        func: Callable[..., Awaitable[Any]],
    ) -> Callable[..., Awaitable[MutationResult]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> MutationResult:
            return await executor.mutate(
                domain,
                functools.partial(func, *args, **kwargs),
                error_message=error_message,
            )

        return wrapper

    return decorator


def _build_call_key(
    signature: inspect.Signature,
    domain: str,
    scope: tuple[str, ...],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> QueryKey:
    """Build the query key of one call from its bound arguments.

    Raises:
        KeyBuildError: If an argument cannot be normalized.
    """
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    return QueryKey.from_components(domain, dict(bound.arguments), *scope)
