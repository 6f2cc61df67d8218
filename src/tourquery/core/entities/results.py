"""Result value objects returned to consumers."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tourquery.core.entities.cache_entry import CacheEntry, QueryStatus
from tourquery.core.entities.query_key import QueryKey
from tourquery.errors import QueryError


@dataclass(frozen=True)
class ServiceResponse:
    """Structured answer of a remote service call.

    ``success=False`` is a domain-level failure; ``message`` is passed
    through to the caller verbatim.
    """

    success: bool
    data: Any = None
    message: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, data: Any = None) -> "ServiceResponse":
        return cls(success=False, data=data, message=message)


async def _no_refetch() -> "QueryState":
    raise RuntimeError("refetch is not available for this state")


@dataclass(frozen=True)
class QueryState:
    """Snapshot of a query as seen by a consumer.

    ``data`` holds the last successful payload even while ``status`` is
    ``LOADING`` or ``ERROR``, so a view can keep showing last-known-good
    results.
    """

    key: QueryKey | None
    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    error: QueryError | None = None
    fetched_at: datetime | None = None
    is_stale: bool = True
    is_fetching: bool = False
    refetch: Callable[..., Awaitable["QueryState"]] = field(
        default=_no_refetch, compare=False, repr=False
    )

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_idle(self) -> bool:
        return self.status is QueryStatus.IDLE

    @classmethod
    def from_entry(
        cls,
        entry: CacheEntry,
        now: datetime,
        is_fetching: bool,
        refetch: Callable[..., Awaitable["QueryState"]],
    ) -> "QueryState":
        """Build a consumer snapshot from a cache entry.

        Args:
            entry: The cache entry.
            now: The current time, used for the staleness flag.
            is_fetching: Whether a producer call is in flight for the key.
            refetch: Callable forcing a refetch of the key.

        Returns:
            A new QueryState.
        """
        error = entry.error if isinstance(entry.error, QueryError) else None
        return cls(
            key=entry.key,
            status=entry.status,
            data=entry.data,
            error=error,
            fetched_at=entry.fetched_at,
            is_stale=entry.is_stale(now),
            is_fetching=is_fetching,
            refetch=refetch,
        )


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a write operation: a payload or a typed failure."""

    domain: str
    ok: bool
    data: Any = None
    error: QueryError | None = None
    invalidated: int = 0

    def unwrap(self) -> Any:
        """Return the payload or raise the failure.

        Raises:
            QueryError: If the mutation failed.
        """
        if self.error is not None:
            raise self.error
        return self.data


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a local validation; every violated rule is listed."""

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class RentalValidationResult(ValidationResult):
    """Validation of a car rental period; ``rental_days`` is 0 when unknown."""

    rental_days: int = 0
