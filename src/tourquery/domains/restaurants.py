"""Restaurant queries, reservation mutation and search state."""

import functools
from datetime import timedelta

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import MutationResult
from tourquery.core.entities.search_params import (
    RestaurantReservation,
    RestaurantSearchParams,
)
from tourquery.core.interfaces.key_builder import IKeyBuilder
from tourquery.core.interfaces.remote_service import IRestaurantService
from tourquery.core.services.debounced_query import DebouncedQuery
from tourquery.core.services.mutation_executor import MutationExecutor
from tourquery.core.services.query_client import QueryClient
from tourquery.core.services.search_state import SearchStateController
from tourquery.infrastructure.key_builders.default import DefaultKeyBuilder

DOMAIN = "restaurants"

SEARCH_STALE_AFTER = timedelta(minutes=5)
SEARCH_RETAIN_FOR = timedelta(minutes=10)
DETAIL_STALE_AFTER = timedelta(minutes=10)
LOOKUP_STALE_AFTER = timedelta(hours=1)
REVIEWS_STALE_AFTER = timedelta(minutes=15)
REVIEWS_RETAIN_FOR = timedelta(minutes=30)
AVAILABILITY_STALE_AFTER = timedelta(minutes=1)
AVAILABILITY_RETAIN_FOR = timedelta(minutes=2)


class RestaurantKeys:
    """Query key factory for the restaurants domain."""

    def __init__(self, key_builder: IKeyBuilder | None = None) -> None:
        self._builder = key_builder or DefaultKeyBuilder()

    def all(self) -> QueryKey:
        return self._builder.build(DOMAIN)

    def search(self, params: RestaurantSearchParams) -> QueryKey:
        return self._builder.build_search_key(DOMAIN, params)

    def detail(self, restaurant_id: str) -> QueryKey:
        return self._builder.build_detail_key(DOMAIN, restaurant_id)

    def categories(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "categories")

    def cuisines(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "cuisines")

    def reviews(self, restaurant_id: str) -> QueryKey:
        return self._builder.build(DOMAIN, None, "reviews", restaurant_id)

    def availability(
        self, restaurant_id: str, date: str, party_size: int
    ) -> QueryKey:
        return self._builder.build(
            DOMAIN,
            {"date": date, "party_size": party_size},
            "availability",
            restaurant_id,
        )


restaurant_keys = RestaurantKeys()


def restaurant_search_query(
    service: IRestaurantService,
    params: RestaurantSearchParams,
    enabled: bool = True,
) -> QueryDefinition:
    """Search restaurants; disabled while no city is selected."""
    return QueryDefinition(
        key=restaurant_keys.search(params),
        producer=functools.partial(service.search, params),
        options=QueryOptions(
            stale_after=SEARCH_STALE_AFTER,
            retain_for=SEARCH_RETAIN_FOR,
            enabled=enabled and params.is_searchable,
            error_message="Restaurant search failed",
        ),
    )


def restaurant_detail_query(
    service: IRestaurantService,
    restaurant_id: str,
    enabled: bool = True,
) -> QueryDefinition:
    return QueryDefinition(
        key=restaurant_keys.detail(restaurant_id),
        producer=functools.partial(service.get_by_id, restaurant_id),
        options=QueryOptions(
            stale_after=DETAIL_STALE_AFTER,
            enabled=enabled and bool(restaurant_id),
            error_message="Failed to get restaurant details",
        ),
    )


def restaurant_categories_query(service: IRestaurantService) -> QueryDefinition:
    return QueryDefinition(
        key=restaurant_keys.categories(),
        producer=service.get_categories,
        options=QueryOptions(stale_after=LOOKUP_STALE_AFTER),
    )


def popular_cuisines_query(service: IRestaurantService) -> QueryDefinition:
    return QueryDefinition(
        key=restaurant_keys.cuisines(),
        producer=service.get_popular_cuisines,
        options=QueryOptions(stale_after=LOOKUP_STALE_AFTER),
    )


def restaurant_reviews_query(
    service: IRestaurantService,
    restaurant_id: str,
    enabled: bool = True,
) -> QueryDefinition:
    return QueryDefinition(
        key=restaurant_keys.reviews(restaurant_id),
        producer=functools.partial(service.get_reviews, restaurant_id),
        options=QueryOptions(
            stale_after=REVIEWS_STALE_AFTER,
            retain_for=REVIEWS_RETAIN_FOR,
            enabled=enabled and bool(restaurant_id),
            error_message="Failed to fetch reviews",
        ),
    )


def restaurant_availability_query(
    service: IRestaurantService,
    restaurant_id: str,
    date: str,
    party_size: int,
    enabled: bool = True,
) -> QueryDefinition:
    """Free time slots for a party; disabled until the party has a size."""
    return QueryDefinition(
        key=restaurant_keys.availability(restaurant_id, date, party_size),
        producer=functools.partial(
            service.get_available_time_slots, restaurant_id, date, party_size
        ),
        options=QueryOptions(
            stale_after=AVAILABILITY_STALE_AFTER,
            retain_for=AVAILABILITY_RETAIN_FOR,
            enabled=enabled and bool(restaurant_id and date) and party_size > 0,
            error_message="Failed to get available time slots",
        ),
    )


async def make_reservation(
    executor: MutationExecutor,
    service: IRestaurantService,
    reservation: RestaurantReservation,
) -> MutationResult:
    """Reserve a table; on success every cached restaurant read is invalidated."""
    return await executor.mutate(
        DOMAIN,
        functools.partial(service.mutate, reservation),
        error_message="Failed to make reservation",
    )


class RestaurantSearchState(SearchStateController[RestaurantSearchParams]):
    def __init__(self, defaults: RestaurantSearchParams | None = None) -> None:
        super().__init__(defaults or RestaurantSearchParams())


def debounced_restaurant_search(
    client: QueryClient,
    service: IRestaurantService,
    state: RestaurantSearchState,
    delay: timedelta | None = None,
) -> DebouncedQuery[RestaurantSearchParams]:
    """Observe restaurant search results for settled search-state changes."""
    return DebouncedQuery(
        client,
        state,
        functools.partial(restaurant_search_query, service),
        delay=delay,
    )
