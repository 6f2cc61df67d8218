"""Remote service boundary interfaces.

The HTTP transport lives outside this package. Services answer with a
``ServiceResponse``; a raised exception is a transport failure.
"""

from typing import Any, Protocol

from tourquery.core.entities.results import ServiceResponse


class IRemoteService(Protocol):
    """Common contract of every searchable domain service."""

    async def search(self, params: Any) -> ServiceResponse:
        """Search the domain catalog with filter and pagination params."""
        ...

    async def get_by_id(self, id: str) -> ServiceResponse:
        """Fetch a single catalog item."""
        ...

    async def mutate(self, payload: Any) -> ServiceResponse:
        """Submit a write (booking, reservation)."""
        ...


class IHotelService(IRemoteService, Protocol):
    async def get_amenities(self) -> ServiceResponse:
        ...

    async def get_availability(
        self, hotel_id: str, check_in: str, check_out: str, guests: int
    ) -> ServiceResponse:
        """Room types still bookable for the stay."""
        ...


class IRestaurantService(IRemoteService, Protocol):
    async def get_categories(self) -> ServiceResponse:
        ...

    async def get_popular_cuisines(self) -> ServiceResponse:
        ...

    async def get_reviews(self, restaurant_id: str) -> ServiceResponse:
        ...

    async def get_available_time_slots(
        self, restaurant_id: str, date: str, party_size: int
    ) -> ServiceResponse:
        ...


class IRentalService(IRemoteService, Protocol):
    async def check_availability(
        self, rental_id: str, check_in: str, check_out: str
    ) -> ServiceResponse:
        """Whether the property is free for the stay, with its pricing."""
        ...


class ICarRentalService(IRemoteService, Protocol):
    async def get_locations(self, city: str) -> ServiceResponse:
        """Pickup and drop-off agencies in ``city``."""
        ...

    async def get_categories(self) -> ServiceResponse:
        ...

    async def get_features(self) -> ServiceResponse:
        ...

    async def get_fuel_types(self) -> ServiceResponse:
        ...

    async def get_insurance_options(self) -> ServiceResponse:
        ...

    async def calculate_price(
        self,
        car_id: str,
        start_date: str,
        end_date: str,
        insurance: tuple[str, ...],
    ) -> ServiceResponse:
        ...


class INewsService(Protocol):
    """News is read-only; articles are addressed by id or slug."""

    async def search(self, params: Any) -> ServiceResponse:
        ...

    async def get_by_id(self, id: str) -> ServiceResponse:
        ...

    async def get_featured(self, limit: int) -> ServiceResponse:
        ...

    async def get_categories(self) -> ServiceResponse:
        ...

    async def get_trending_tags(self, limit: int) -> ServiceResponse:
        ...
