"""Domain entities for tourquery."""

from tourquery.core.entities.cache_config import CacheConfig, QueryOptions
from tourquery.core.entities.cache_entry import CacheEntry, QueryStatus
from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import (
    MutationResult,
    QueryState,
    RentalValidationResult,
    ServiceResponse,
    ValidationResult,
)
from tourquery.core.entities.search_params import (
    CarRentalBooking,
    CarRentalSearchParams,
    CustomerInfo,
    DriverInfo,
    GuestInfo,
    HotelBooking,
    HotelSearchParams,
    NewsSearchParams,
    PriceRange,
    RentalBooking,
    RentalSearchParams,
    RestaurantReservation,
    RestaurantSearchParams,
)

__all__ = [
    "CacheConfig",
    "QueryOptions",
    "CacheEntry",
    "QueryStatus",
    "QueryKey",
    "QueryDefinition",
    "QueryState",
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
]
