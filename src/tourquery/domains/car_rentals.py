"""Car rental queries, booking mutation, search state and driver rules.

Price quotes live in their own ``rental_price`` domain: they depend on the
car and the period only, so a booking does not invalidate them.
"""

import functools
from dataclasses import dataclass
from datetime import date, timedelta

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.results import MutationResult, RentalValidationResult
from tourquery.core.entities.search_params import (
    CarRentalBooking,
    CarRentalSearchParams,
)
from tourquery.core.interfaces.key_builder import IKeyBuilder
from tourquery.core.interfaces.remote_service import ICarRentalService
from tourquery.core.services.date_validation import validate_rental_dates
from tourquery.core.services.mutation_executor import MutationExecutor
from tourquery.core.services.search_state import SearchStateController
from tourquery.infrastructure.key_builders.default import DefaultKeyBuilder
from tourquery.utils.dates import calculate_nights

DOMAIN = "car_rentals"
PRICE_DOMAIN = "rental_price"

SEARCH_STALE_AFTER = timedelta(minutes=5)
SEARCH_RETAIN_FOR = timedelta(minutes=10)
DETAIL_STALE_AFTER = timedelta(minutes=10)
LOCATIONS_STALE_AFTER = timedelta(minutes=30)
LOOKUP_STALE_AFTER = timedelta(hours=1)
PRICE_STALE_AFTER = timedelta(minutes=5)

YOUNG_DRIVER_AGE = 25
YOUNG_DRIVER_FEE = 15  # per day
SENIOR_DRIVER_AGE = 65
SENIOR_DRIVER_DISCOUNT = 0.1


class CarRentalKeys:
    """Query key factory for the car rentals domain."""

    def __init__(self, key_builder: IKeyBuilder | None = None) -> None:
        self._builder = key_builder or DefaultKeyBuilder()

    def all(self) -> QueryKey:
        return self._builder.build(DOMAIN)

    def search(self, params: CarRentalSearchParams) -> QueryKey:
        return self._builder.build_search_key(DOMAIN, params)

    def detail(self, car_id: str) -> QueryKey:
        return self._builder.build_detail_key(DOMAIN, car_id)

    def locations(self, city: str) -> QueryKey:
        return self._builder.build(DOMAIN, None, "locations", city)

    def categories(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "categories")

    def features(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "features")

    def fuel_types(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "fuel_types")

    def insurance(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "insurance")

    def price(
        self,
        car_id: str,
        start_date: str,
        end_date: str,
        insurance: tuple[str, ...] = (),
    ) -> QueryKey:
        return self._builder.build(
            PRICE_DOMAIN,
            {
                "car_id": car_id,
                "start_date": start_date,
                "end_date": end_date,
                "insurance": insurance,
            },
        )


car_rental_keys = CarRentalKeys()


def car_rental_search_query(
    service: ICarRentalService,
    params: CarRentalSearchParams,
    enabled: bool = True,
) -> QueryDefinition:
    """Search cars; disabled until pickup city and both rental dates are set."""
    return QueryDefinition(
        key=car_rental_keys.search(params),
        producer=functools.partial(service.search, params),
        options=QueryOptions(
            stale_after=SEARCH_STALE_AFTER,
            retain_for=SEARCH_RETAIN_FOR,
            enabled=enabled and params.is_searchable,
            error_message="Car rental search failed",
        ),
    )


def car_rental_detail_query(
    service: ICarRentalService,
    car_id: str,
    enabled: bool = True,
) -> QueryDefinition:
    return QueryDefinition(
        key=car_rental_keys.detail(car_id),
        producer=functools.partial(service.get_by_id, car_id),
        options=QueryOptions(
            stale_after=DETAIL_STALE_AFTER,
            enabled=enabled and bool(car_id),
            error_message="Failed to get car details",
        ),
    )


def rental_locations_query(
    service: ICarRentalService,
    city: str,
    enabled: bool = True,
) -> QueryDefinition:
    return QueryDefinition(
        key=car_rental_keys.locations(city),
        producer=functools.partial(service.get_locations, city),
        options=QueryOptions(
            stale_after=LOCATIONS_STALE_AFTER,
            enabled=enabled and bool(city),
            error_message="Failed to get rental locations",
        ),
    )


def car_categories_query(service: ICarRentalService) -> QueryDefinition:
    return QueryDefinition(
        key=car_rental_keys.categories(),
        producer=service.get_categories,
        options=QueryOptions(stale_after=LOOKUP_STALE_AFTER),
    )


def car_features_query(service: ICarRentalService) -> QueryDefinition:
    return QueryDefinition(
        key=car_rental_keys.features(),
        producer=service.get_features,
        options=QueryOptions(stale_after=LOOKUP_STALE_AFTER),
    )


def car_fuel_types_query(service: ICarRentalService) -> QueryDefinition:
    return QueryDefinition(
        key=car_rental_keys.fuel_types(),
        producer=service.get_fuel_types,
        options=QueryOptions(stale_after=LOOKUP_STALE_AFTER),
    )


def insurance_options_query(service: ICarRentalService) -> QueryDefinition:
    return QueryDefinition(
        key=car_rental_keys.insurance(),
        producer=service.get_insurance_options,
        options=QueryOptions(stale_after=LOOKUP_STALE_AFTER),
    )


def rental_price_query(
    service: ICarRentalService,
    car_id: str,
    start_date: str,
    end_date: str,
    insurance: tuple[str, ...] = (),
) -> QueryDefinition:
    """Quote a rental; disabled until the car and both dates are known."""
    return QueryDefinition(
        key=car_rental_keys.price(car_id, start_date, end_date, insurance),
        producer=functools.partial(
            service.calculate_price, car_id, start_date, end_date, insurance
        ),
        options=QueryOptions(
            stale_after=PRICE_STALE_AFTER,
            enabled=bool(car_id and start_date and end_date),
            error_message="Failed to calculate rental price",
        ),
    )


async def book_car(
    executor: MutationExecutor,
    service: ICarRentalService,
    booking: CarRentalBooking,
) -> MutationResult:
    """Book a car; on success every cached car rental read is invalidated."""
    return await executor.mutate(
        DOMAIN,
        functools.partial(service.mutate, booking),
        error_message="Failed to book car rental",
    )


@dataclass(frozen=True)
class AgeRestrictions:
    """What a driver of a given age may rent, and at which surcharge."""

    can_rent_economy: bool
    can_rent_suv: bool
    can_rent_luxury: bool
    young_driver_fee: int
    senior_driver_discount: float
    available_categories: tuple[str, ...]


def age_restrictions(driver_age: int) -> AgeRestrictions:
    """Derive category access, young-driver fee and senior discount.

    Economy and compact cars need 21, midsize/fullsize/SUV need 23 and
    luxury cars need 25.
    """
    economy = driver_age >= 21
    suv = driver_age >= 23
    luxury = driver_age >= 25

    categories: list[str] = []
    if economy:
        categories.extend(["economy", "compact"])
    if suv:
        categories.extend(["midsize", "fullsize", "suv"])
    if luxury:
        categories.append("luxury")

    return AgeRestrictions(
        can_rent_economy=economy,
        can_rent_suv=suv,
        can_rent_luxury=luxury,
        young_driver_fee=YOUNG_DRIVER_FEE if driver_age < YOUNG_DRIVER_AGE else 0,
        senior_driver_discount=(
            SENIOR_DRIVER_DISCOUNT if driver_age >= SENIOR_DRIVER_AGE else 0.0
        ),
        available_categories=tuple(categories),
    )


class CarRentalSearchState(SearchStateController[CarRentalSearchParams]):
    """Search state of the car rental listing, with period helpers."""

    def __init__(self, defaults: CarRentalSearchParams | None = None) -> None:
        super().__init__(defaults or CarRentalSearchParams())

    @property
    def rental_days(self) -> int:
        return calculate_nights(self.params.pickup_date, self.params.dropoff_date)

    @property
    def restrictions(self) -> AgeRestrictions:
        return age_restrictions(self.params.driver_age)

    def validate_dates(self, today: date | None = None) -> RentalValidationResult:
        return validate_rental_dates(
            self.params.pickup_date,
            self.params.dropoff_date,
            self.params.driver_age,
            today=today,
        )
