"""Hotel queries, booking mutation and search state."""

import functools
from datetime import date, timedelta

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import MutationResult, ValidationResult
from tourquery.core.entities.search_params import HotelBooking, HotelSearchParams
from tourquery.core.interfaces.key_builder import IKeyBuilder
from tourquery.core.interfaces.remote_service import IHotelService
from tourquery.core.services.date_validation import validate_date_range
from tourquery.core.services.mutation_executor import MutationExecutor
from tourquery.core.services.search_state import SearchStateController
from tourquery.infrastructure.key_builders.default import DefaultKeyBuilder
from tourquery.utils.dates import calculate_nights

DOMAIN = "hotels"

SEARCH_STALE_AFTER = timedelta(minutes=5)
SEARCH_RETAIN_FOR = timedelta(minutes=10)
DETAIL_STALE_AFTER = timedelta(minutes=10)
AMENITIES_STALE_AFTER = timedelta(hours=1)
AVAILABILITY_STALE_AFTER = timedelta(minutes=2)
AVAILABILITY_RETAIN_FOR = timedelta(minutes=5)


class HotelKeys:
    """Query key factory for the hotels domain."""

    def __init__(self, key_builder: IKeyBuilder | None = None) -> None:
        self._builder = key_builder or DefaultKeyBuilder()

    def all(self) -> QueryKey:
        return self._builder.build(DOMAIN)

    def search(self, params: HotelSearchParams) -> QueryKey:
        return self._builder.build_search_key(DOMAIN, params)

    def detail(self, hotel_id: str) -> QueryKey:
        return self._builder.build_detail_key(DOMAIN, hotel_id)

    def amenities(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "amenities")

    def availability(
        self, hotel_id: str, check_in: str, check_out: str, guests: int
    ) -> QueryKey:
        return self._builder.build(
            DOMAIN,
            {"check_in": check_in, "check_out": check_out, "guests": guests},
            "availability",
            hotel_id,
        )


hotel_keys = HotelKeys()


def hotel_search_query(
    service: IHotelService,
    params: HotelSearchParams,
    enabled: bool = True,
) -> QueryDefinition:
    """Search hotels; disabled until city and both stay dates are set."""
    return QueryDefinition(
        key=hotel_keys.search(params),
        producer=functools.partial(service.search, params),
        options=QueryOptions(
            stale_after=SEARCH_STALE_AFTER,
            retain_for=SEARCH_RETAIN_FOR,
            enabled=enabled and params.is_searchable,
            error_message="Hotel search failed",
        ),
    )


def hotel_detail_query(
    service: IHotelService,
    hotel_id: str,
    enabled: bool = True,
) -> QueryDefinition:
    return QueryDefinition(
        key=hotel_keys.detail(hotel_id),
        producer=functools.partial(service.get_by_id, hotel_id),
        options=QueryOptions(
            stale_after=DETAIL_STALE_AFTER,
            enabled=enabled and bool(hotel_id),
            error_message="Failed to get hotel details",
        ),
    )


def hotel_amenities_query(service: IHotelService) -> QueryDefinition:
    return QueryDefinition(
        key=hotel_keys.amenities(),
        producer=service.get_amenities,
        options=QueryOptions(stale_after=AMENITIES_STALE_AFTER),
    )


def hotel_availability_query(
    service: IHotelService,
    hotel_id: str,
    check_in: str,
    check_out: str,
    guests: int,
    enabled: bool = True,
) -> QueryDefinition:
    """Bookable room types for a stay; needs the hotel and both dates."""
    return QueryDefinition(
        key=hotel_keys.availability(hotel_id, check_in, check_out, guests),
        producer=functools.partial(
            service.get_availability, hotel_id, check_in, check_out, guests
        ),
        options=QueryOptions(
            stale_after=AVAILABILITY_STALE_AFTER,
            retain_for=AVAILABILITY_RETAIN_FOR,
            enabled=enabled and bool(hotel_id and check_in and check_out),
            error_message="Failed to check hotel availability",
        ),
    )


async def book_hotel(
    executor: MutationExecutor,
    service: IHotelService,
    booking: HotelBooking,
) -> MutationResult:
    """Book a room; on success every cached hotel read is invalidated."""
    return await executor.mutate(
        DOMAIN,
        functools.partial(service.mutate, booking),
        error_message="Failed to book hotel",
    )


class HotelSearchState(SearchStateController[HotelSearchParams]):
    """Search state of the hotel listing, with stay helpers."""

    def __init__(self, defaults: HotelSearchParams | None = None) -> None:
        super().__init__(defaults or HotelSearchParams())

    @property
    def nights(self) -> int:
        return calculate_nights(self.params.check_in, self.params.check_out)

    def validate_dates(self, today: date | None = None) -> ValidationResult:
        return validate_date_range(
            self.params.check_in, self.params.check_out, today=today
        )
