"""tourquery - remote data cache and search-state orchestration.

The data layer behind a tourism/event frontend: hotel, restaurant,
holiday rental and car rental search and booking plus a news feed. It
keys and deduplicates remote reads, serves fresh data from cache,
refreshes stale data while still showing it, invalidates a domain after
a successful write, resets pagination when filters change and debounces
rapid input.

Example:
    from tourquery import (
        CacheConfig,
        MutationExecutor,
        QueryClient,
    )
    from tourquery.domains import (
        HotelSearchState,
        book_hotel,
        hotel_search_query,
    )

    async with QueryClient(config=CacheConfig()) as client:
        executor = MutationExecutor(client)
        state = HotelSearchState()
        state.update(check_in="2030-06-10", check_out="2030-06-14")

        query = client.observe(*hotel_search_query(api, state.params).as_args())
        query.subscribe(render)

        state.update(city="rabat")  # back to page one
        query.close()
        query = client.observe(*hotel_search_query(api, state.params).as_args())

        result = await book_hotel(executor, api, booking)
        if not result.ok:
            show_error(result.error.message)
"""

from tourquery.core.entities import (
    CacheConfig,
    CacheEntry,
    CarRentalBooking,
    CarRentalSearchParams,
    CustomerInfo,
    DriverInfo,
    GuestInfo,
    HotelBooking,
    HotelSearchParams,
    MutationResult,
    NewsSearchParams,
    PriceRange,
    QueryDefinition,
    QueryKey,
    QueryOptions,
    QueryState,
    QueryStatus,
    RentalBooking,
    RentalSearchParams,
    RentalValidationResult,
    RestaurantReservation,
    RestaurantSearchParams,
    ServiceResponse,
    ValidationResult,
)
from tourquery.core.interfaces import (
    ICacheStore,
    ICarRentalService,
    IHotelService,
    IKeyBuilder,
    INewsService,
    IRemoteService,
    IRentalService,
    IRestaurantService,
)
from tourquery.core.services import (
    DebouncedQuery,
    Debouncer,
    MutationExecutor,
    QueryClient,
    QueryObserver,
    SearchStateController,
    merge_search_params,
    validate_date_range,
    validate_rental_dates,
)
from tourquery.decorators import cached, invalidates
from tourquery.errors import (
    DomainError,
    KeyBuildError,
    QueryError,
    TourQueryError,
    TransportError,
    ValidationError,
)
from tourquery.infrastructure import DefaultKeyBuilder, InMemoryCacheStore

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "QueryKey",
    "QueryDefinition",
    "QueryOptions",
    "QueryState",
    "QueryStatus",
    "MutationResult",
    "ServiceResponse",
    "ValidationResult",
    "RentalValidationResult",
    # Search parameters and payloads
    "HotelSearchParams",
    "RestaurantSearchParams",
    "CarRentalSearchParams",
    "RentalSearchParams",
    "NewsSearchParams",
    "PriceRange",
    "HotelBooking",
    "GuestInfo",
    "RestaurantReservation",
    "CustomerInfo",
    "CarRentalBooking",
    "DriverInfo",
    "RentalBooking",
    # Core interfaces
    "ICacheStore",
    "IKeyBuilder",
    "IRemoteService",
    "IHotelService",
    "IRestaurantService",
    "IRentalService",
    "ICarRentalService",
    "INewsService",
    # Core services
    "QueryClient",
    "QueryObserver",
    "MutationExecutor",
    "SearchStateController",
    "merge_search_params",
    "Debouncer",
    "DebouncedQuery",
    "validate_date_range",
    "validate_rental_dates",
    # Infrastructure implementations
    "InMemoryCacheStore",
    "DefaultKeyBuilder",
    # Decorators
    "cached",
    "invalidates",
    # Errors
    "TourQueryError",
    "KeyBuildError",
    "ValidationError",
    "QueryError",
    "DomainError",
    "TransportError",
]
