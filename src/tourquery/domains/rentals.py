"""Holiday rental queries, booking mutation and search state."""

import functools
from datetime import date, timedelta

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import MutationResult, ValidationResult
from tourquery.core.entities.search_params import RentalBooking, RentalSearchParams
from tourquery.core.interfaces.key_builder import IKeyBuilder
from tourquery.core.interfaces.remote_service import IRentalService
from tourquery.core.services.date_validation import validate_date_range
from tourquery.core.services.mutation_executor import MutationExecutor
from tourquery.core.services.search_state import SearchStateController
from tourquery.infrastructure.key_builders.default import DefaultKeyBuilder
from tourquery.utils.dates import calculate_nights

DOMAIN = "rentals"

SEARCH_STALE_AFTER = timedelta(minutes=5)
SEARCH_RETAIN_FOR = timedelta(minutes=10)
DETAIL_STALE_AFTER = timedelta(minutes=10)
DETAIL_RETAIN_FOR = timedelta(minutes=30)
AVAILABILITY_STALE_AFTER = timedelta(minutes=2)
AVAILABILITY_RETAIN_FOR = timedelta(minutes=5)


class RentalKeys:
    """Query key factory for the holiday rentals domain."""

    def __init__(self, key_builder: IKeyBuilder | None = None) -> None:
        self._builder = key_builder or DefaultKeyBuilder()

    def all(self) -> QueryKey:
        return self._builder.build(DOMAIN)

    def search(self, params: RentalSearchParams) -> QueryKey:
        return self._builder.build_search_key(DOMAIN, params)

    def detail(self, rental_id: str) -> QueryKey:
        return self._builder.build_detail_key(DOMAIN, rental_id)

    def availability(self, rental_id: str, check_in: str, check_out: str) -> QueryKey:
        return self._builder.build(
            DOMAIN,
            {"check_in": check_in, "check_out": check_out},
            "availability",
            rental_id,
        )


rental_keys = RentalKeys()


def rental_search_query(
    service: IRentalService,
    params: RentalSearchParams,
    enabled: bool = True,
) -> QueryDefinition:
    """Search holiday rentals; disabled while no city is selected."""
    return QueryDefinition(
        key=rental_keys.search(params),
        producer=functools.partial(service.search, params),
        options=QueryOptions(
            stale_after=SEARCH_STALE_AFTER,
            retain_for=SEARCH_RETAIN_FOR,
            enabled=enabled and params.is_searchable,
            error_message="Failed to fetch rentals",
        ),
    )


def rental_detail_query(
    service: IRentalService,
    rental_id: str,
    enabled: bool = True,
) -> QueryDefinition:
    return QueryDefinition(
        key=rental_keys.detail(rental_id),
        producer=functools.partial(service.get_by_id, rental_id),
        options=QueryOptions(
            stale_after=DETAIL_STALE_AFTER,
            retain_for=DETAIL_RETAIN_FOR,
            enabled=enabled and bool(rental_id),
            error_message="Failed to fetch rental details",
        ),
    )


def rental_availability_query(
    service: IRentalService,
    rental_id: str,
    check_in: str,
    check_out: str,
    enabled: bool = True,
) -> QueryDefinition:
    """Whether a property is free for a stay; needs the property and both dates."""
    return QueryDefinition(
        key=rental_keys.availability(rental_id, check_in, check_out),
        producer=functools.partial(
            service.check_availability, rental_id, check_in, check_out
        ),
        options=QueryOptions(
            stale_after=AVAILABILITY_STALE_AFTER,
            retain_for=AVAILABILITY_RETAIN_FOR,
            enabled=enabled and bool(rental_id and check_in and check_out),
            error_message="Failed to check rental availability",
        ),
    )


async def book_rental(
    executor: MutationExecutor,
    service: IRentalService,
    booking: RentalBooking,
) -> MutationResult:
    """Book a property; on success every cached rental read is invalidated."""
    return await executor.mutate(
        DOMAIN,
        functools.partial(service.mutate, booking),
        error_message="Failed to create booking",
    )


class RentalSearchState(SearchStateController[RentalSearchParams]):
    """Search state of the holiday rental listing."""

    def __init__(self, defaults: RentalSearchParams | None = None) -> None:
        super().__init__(defaults or RentalSearchParams())

    @property
    def nights(self) -> int:
        return calculate_nights(self.params.check_in, self.params.check_out)

    def validate_dates(self, today: date | None = None) -> ValidationResult:
        return validate_date_range(
            self.params.check_in, self.params.check_out, today=today
        )
