"""Search parameter entities for each searchable domain.

Every parameter set carries ``limit``, ``offset`` and ``sort_by``; the
remaining fields are domain filters. Instances are immutable and are
replaced wholesale by the search-state controller.
"""

from dataclasses import dataclass

DEFAULT_CITY = "casablanca"
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class PriceRange:
    min: float
    max: float


@dataclass(frozen=True)
class HotelSearchParams:
    city: str = DEFAULT_CITY
    check_in: str = ""  # YYYY-MM-DD
    check_out: str = ""  # YYYY-MM-DD
    guests: int = 2
    rooms: int = 1
    star_rating: tuple[int, ...] | None = None
    price_range: PriceRange | None = None
    amenities: tuple[str, ...] | None = None
    sort_by: str = "rating"  # price | rating | distance | popularity
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @property
    def is_searchable(self) -> bool:
        """Hotel search needs a city and both stay dates."""
        return bool(self.city and self.check_in and self.check_out)


@dataclass(frozen=True)
class RestaurantSearchParams:
    city: str = DEFAULT_CITY
    cuisine: str | None = None
    price_level: int | None = None  # 1-4
    rating: float | None = None
    radius: int | None = None  # meters
    open_now: bool | None = None
    sort_by: str = "rating"  # rating | distance | review_count | best_match
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @property
    def is_searchable(self) -> bool:
        return bool(self.city)


@dataclass(frozen=True)
class CarRentalSearchParams:
    pickup_city: str = DEFAULT_CITY
    pickup_date: str = ""  # YYYY-MM-DD
    dropoff_date: str = ""  # YYYY-MM-DD
    pickup_time: str = "10:00"  # HH:MM
    dropoff_time: str = "10:00"  # HH:MM
    driver_age: int = 25
    dropoff_city: str | None = None
    pickup_location_id: str | None = None
    dropoff_location_id: str | None = None
    category: tuple[str, ...] | None = None
    transmission: str | None = None  # manual | automatic
    fuel_type: tuple[str, ...] | None = None
    price_range: PriceRange | None = None
    features: tuple[str, ...] | None = None
    sort_by: str = "price"  # price | rating | brand | category
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @property
    def is_searchable(self) -> bool:
        """Car search needs a pickup city and both rental dates."""
        return bool(self.pickup_city and self.pickup_date and self.dropoff_date)


@dataclass(frozen=True)
class RentalSearchParams:
    """Holiday rental (apartment, riad, villa) search."""

    city: str = DEFAULT_CITY
    check_in: str = ""  # YYYY-MM-DD
    check_out: str = ""  # YYYY-MM-DD
    guests: int = 2
    property_type: tuple[str, ...] | None = None
    price_range: PriceRange | None = None
    bedrooms: int | None = None
    amenities: tuple[str, ...] | None = None
    instant_book: bool | None = None
    sort_by: str = "rating"  # price | rating | distance | newest
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @property
    def is_searchable(self) -> bool:
        return bool(self.city)


@dataclass(frozen=True)
class NewsSearchParams:
    category: str = "All"
    search: str | None = None
    featured: bool | None = None
    tags: tuple[str, ...] | None = None
    date_from: str | None = None
    date_to: str | None = None
    sort_by: str = "date"
    limit: int = 10
    offset: int = 0

    @property
    def is_searchable(self) -> bool:
        return True


@dataclass(frozen=True)
class GuestInfo:
    first_name: str
    last_name: str
    email: str
    phone: str
    country: str
    special_requests: str | None = None


@dataclass(frozen=True)
class HotelBooking:
    hotel_id: str
    room_type_id: str
    check_in: str
    check_out: str
    guests: int
    rooms: int
    guest_info: GuestInfo


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str
    phone: str
    special_requests: str | None = None


@dataclass(frozen=True)
class RestaurantReservation:
    restaurant_id: str
    date: str
    time: str
    party_size: int
    customer_info: CustomerInfo


@dataclass(frozen=True)
class DriverInfo:
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: str
    license_number: str
    license_country: str
    license_expiry: str


@dataclass(frozen=True)
class CarRentalBooking:
    car_id: str
    pickup_location_id: str
    dropoff_location_id: str
    pickup_date: str
    dropoff_date: str
    pickup_time: str
    dropoff_time: str
    driver_info: DriverInfo
    insurance: tuple[str, ...] = ()
    extras: tuple[str, ...] = ()


@dataclass(frozen=True)
class RentalBooking:
    rental_id: str
    check_in: str
    check_out: str
    adults: int
    guest_info: GuestInfo
    children: int = 0
    purpose: str | None = None  # vacation | business | world_cup | family_visit
