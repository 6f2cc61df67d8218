"""Cache configuration entities."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides defaults for the query client, the cache store and the
    debounced search helpers.

    Staleness:
        ``default_stale_after`` is how long successful data is served
        without a refetch. The default of zero means every read of an
        existing entry returns it and refreshes it in the background.

    Retention:
        ``default_retain_for`` is how long an entry survives after its last
        fetch or after its last observer detached. ``gc_interval`` bounds
        how often lazy garbage collection sweeps the store.
    """

    enabled: bool = True
    default_stale_after: timedelta | None = None
    default_retain_for: timedelta | None = None
    gc_interval: timedelta | None = None
    max_size: int = 1000

    # Debounced search
    debounce_delay: timedelta | None = None

    def __post_init__(self) -> None:
        """Set default durations if not provided."""
        if self.default_stale_after is None:
            self.default_stale_after = timedelta(0)
        if self.default_retain_for is None:
            self.default_retain_for = timedelta(minutes=5)
        if self.gc_interval is None:
            self.gc_interval = timedelta(minutes=1)
        if self.debounce_delay is None:
            self.debounce_delay = timedelta(milliseconds=500)


@dataclass(frozen=True)
class QueryOptions:
    """Per-query overrides of the client configuration.

    ``None`` durations fall back to the client's ``CacheConfig``.
    ``enabled=False`` keeps the query idle: the store is not consulted
    and the producer is never called. ``error_message`` replaces the
    generic text used when a service reports ``success=False`` without a
    message of its own.
    """

    stale_after: timedelta | None = None
    retain_for: timedelta | None = None
    enabled: bool = True
    error_message: str | None = None
