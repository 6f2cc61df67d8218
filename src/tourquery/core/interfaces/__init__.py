"""Core interfaces (Protocol classes) for tourquery."""

from tourquery.core.interfaces.cache_store import ICacheStore
from tourquery.core.interfaces.key_builder import IKeyBuilder
from tourquery.core.interfaces.remote_service import (
    ICarRentalService,
    IHotelService,
    INewsService,
    IRemoteService,
    IRentalService,
    IRestaurantService,
)

__all__ = [
    "ICacheStore",
    "IKeyBuilder",
    "IRemoteService",
    "IHotelService",
    "IRestaurantService",
    "IRentalService",
    "ICarRentalService",
    "INewsService",
]
