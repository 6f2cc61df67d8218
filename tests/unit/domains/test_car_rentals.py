"""Tests for the car rentals domain."""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from tourquery import (
    CarRentalBooking,
    CarRentalSearchParams,
    DriverInfo,
    MutationExecutor,
    QueryClient,
    ServiceResponse,
)
from tourquery.core.services.date_validation import (
    DRIVER_TOO_YOUNG,
    DROPOFF_NOT_AFTER_PICKUP,
)
from tourquery.domains import (
    CarRentalSearchState,
    age_restrictions,
    book_car,
    car_categories_query,
    car_features_query,
    car_fuel_types_query,
    car_rental_detail_query,
    car_rental_keys,
    car_rental_search_query,
    insurance_options_query,
    rental_locations_query,
    rental_price_query,
)

SEARCHABLE = CarRentalSearchParams(
    pickup_city="agadir", pickup_date="2030-06-10", dropoff_date="2030-06-14"
)

BOOKING = CarRentalBooking(
    car_id="car-3",
    pickup_location_id="aga-airport",
    dropoff_location_id="aga-airport",
    pickup_date="2030-06-10",
    dropoff_date="2030-06-14",
    pickup_time="10:00",
    dropoff_time="10:00",
    driver_info=DriverInfo(
        first_name="Salma",
        last_name="Idrissi",
        email="salma@example.com",
        phone="+212633333333",
        date_of_birth="1990-04-02",
        license_number="MA-123456",
        license_country="MA",
        license_expiry="2032-01-01",
    ),
    insurance=("full",),
)


@pytest.fixture
def service() -> AsyncMock:
    service = AsyncMock()
    service.search.return_value = ServiceResponse.ok([{"id": "car-3"}])
    service.get_by_id.return_value = ServiceResponse.ok({"id": "car-3"})
    service.get_locations.return_value = ServiceResponse.ok([{"id": "aga-airport"}])
    service.get_categories.return_value = ServiceResponse.ok(["economy", "suv"])
    service.get_features.return_value = ServiceResponse.ok(["GPS"])
    service.get_fuel_types.return_value = ServiceResponse.ok(["diesel"])
    service.get_insurance_options.return_value = ServiceResponse.ok(["basic"])
    service.calculate_price.return_value = ServiceResponse.ok({"totalPrice": 320})
    service.mutate.return_value = ServiceResponse.ok({"confirmationId": "CR-1"})
    return service


class TestCarRentalKeys:
    """Tests for the car rental key factory."""

    def test_keys_share_domain(self) -> None:
        for key in (
            car_rental_keys.search(SEARCHABLE),
            car_rental_keys.detail("car-3"),
            car_rental_keys.locations("agadir"),
            car_rental_keys.categories(),
            car_rental_keys.features(),
            car_rental_keys.fuel_types(),
            car_rental_keys.insurance(),
        ):
            assert key.matches("car_rentals")

    def test_price_key_outside_domain(self) -> None:
        key = car_rental_keys.price("car-3", "2030-06-10", "2030-06-14")

        assert not key.matches("car_rentals")
        assert key != car_rental_keys.price(
            "car-3", "2030-06-10", "2030-06-14", ("full",)
        )


class TestCarRentalQueries:
    """Tests for car rental query definitions."""

    @pytest.mark.parametrize(
        "params",
        [
            CarRentalSearchParams(pickup_date="2030-06-10", dropoff_date="2030-06-14"),
            CarRentalSearchParams(pickup_city="agadir", dropoff_date="2030-06-14"),
            CarRentalSearchParams(pickup_city="agadir", pickup_date="2030-06-10"),
        ],
    )
    def test_search_needs_city_and_both_dates(self, params) -> None:
        assert not car_rental_search_query(AsyncMock(), params).options.enabled

    @pytest.mark.asyncio
    async def test_search_disabled_without_dates(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        query = car_rental_search_query(service, CarRentalSearchParams())

        assert (await client.fetch(*query.as_args())).is_idle
        service.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search(self, client: QueryClient, service: AsyncMock) -> None:
        query = car_rental_search_query(service, SEARCHABLE)

        state = await client.fetch(*query.as_args())

        assert state.data == [{"id": "car-3"}]
        service.search.assert_awaited_once_with(SEARCHABLE)
        assert query.options.stale_after == timedelta(minutes=5)
        assert query.options.retain_for == timedelta(minutes=10)

    @pytest.mark.asyncio
    async def test_search_failure_message(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        service.search.return_value = ServiceResponse(success=False)

        state = await client.fetch(
            *car_rental_search_query(service, SEARCHABLE).as_args()
        )

        assert state.error.message == "Car rental search failed"

    @pytest.mark.asyncio
    async def test_detail_failure_message(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        service.get_by_id.return_value = ServiceResponse(success=False)

        state = await client.fetch(*car_rental_detail_query(service, "car-3").as_args())

        assert state.error.message == "Failed to get car details"

    @pytest.mark.asyncio
    async def test_locations_gated_on_city(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        unset = rental_locations_query(service, "")
        assert (await client.fetch(*unset.as_args())).is_idle

        query = rental_locations_query(service, "agadir")
        state = await client.fetch(*query.as_args())

        assert state.data == [{"id": "aga-airport"}]
        service.get_locations.assert_awaited_once_with("agadir")
        assert query.options.stale_after == timedelta(minutes=30)

    @pytest.mark.parametrize(
        "build,method,expected",
        [
            (car_categories_query, "get_categories", ["economy", "suv"]),
            (car_features_query, "get_features", ["GPS"]),
            (car_fuel_types_query, "get_fuel_types", ["diesel"]),
            (insurance_options_query, "get_insurance_options", ["basic"]),
        ],
    )
    @pytest.mark.asyncio
    async def test_lookups(
        self, client: QueryClient, service: AsyncMock, build, method, expected
    ) -> None:
        query = build(service)

        state = await client.fetch(*query.as_args())

        assert state.data == expected
        getattr(service, method).assert_awaited_once()
        assert query.options.stale_after == timedelta(hours=1)


class TestRentalPrice:
    """Tests for rental_price_query."""

    @pytest.mark.asyncio
    async def test_quote(self, client: QueryClient, service: AsyncMock) -> None:
        query = rental_price_query(
            service, "car-3", "2030-06-10", "2030-06-14", ("full",)
        )

        state = await client.fetch(*query.as_args())

        assert state.data == {"totalPrice": 320}
        service.calculate_price.assert_awaited_once_with(
            "car-3", "2030-06-10", "2030-06-14", ("full",)
        )
        assert query.options.stale_after == timedelta(minutes=5)

    @pytest.mark.asyncio
    async def test_disabled_without_period(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        query = rental_price_query(service, "car-3", "2030-06-10", "")

        assert (await client.fetch(*query.as_args())).is_idle
        service.calculate_price.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_message(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        service.calculate_price.return_value = ServiceResponse(success=False)

        state = await client.fetch(
            *rental_price_query(service, "car-3", "2030-06-10", "2030-06-14").as_args()
        )

        assert state.error.message == "Failed to calculate rental price"


class TestBookCar:
    """Tests for book_car."""

    @pytest.mark.asyncio
    async def test_booking_invalidates_car_reads_only(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        search = car_rental_search_query(service, SEARCHABLE)
        price = rental_price_query(service, "car-3", "2030-06-10", "2030-06-14")
        await client.fetch(*search.as_args())
        await client.fetch(*car_categories_query(service).as_args())
        await client.fetch(*price.as_args())

        result = await book_car(MutationExecutor(client), service, BOOKING)

        assert result.ok
        assert result.data == {"confirmationId": "CR-1"}
        assert result.invalidated == 2
        assert client.store.get(search.key).invalidated
        assert not client.store.get(price.key).invalidated

    @pytest.mark.asyncio
    async def test_rejected_booking(
        self, client: QueryClient, service: AsyncMock
    ) -> None:
        service.mutate.return_value = ServiceResponse(success=False)

        result = await book_car(MutationExecutor(client), service, BOOKING)

        assert not result.ok
        assert result.error.message == "Failed to book car rental"


class TestAgeRestrictions:
    """Tests for age_restrictions."""

    @pytest.mark.parametrize(
        "age,categories",
        [
            (19, ()),
            (21, ("economy", "compact")),
            (23, ("economy", "compact", "midsize", "fullsize", "suv")),
            (25, ("economy", "compact", "midsize", "fullsize", "suv", "luxury")),
        ],
    )
    def test_available_categories(self, age: int, categories) -> None:
        assert age_restrictions(age).available_categories == categories

    def test_young_driver_fee(self) -> None:
        assert age_restrictions(24).young_driver_fee == 15
        assert age_restrictions(25).young_driver_fee == 0

    def test_senior_discount(self) -> None:
        assert age_restrictions(64).senior_driver_discount == 0
        assert age_restrictions(65).senior_driver_discount == 0.1

    def test_flags(self) -> None:
        restrictions = age_restrictions(22)

        assert restrictions.can_rent_economy
        assert not restrictions.can_rent_suv
        assert not restrictions.can_rent_luxury


class TestCarRentalSearchState:
    """Tests for CarRentalSearchState."""

    def test_defaults(self) -> None:
        params = CarRentalSearchState().params

        assert params.pickup_city == "casablanca"
        assert params.pickup_time == "10:00"
        assert params.dropoff_time == "10:00"
        assert params.driver_age == 25
        assert params.sort_by == "price"
        assert params.limit == 20
        assert not params.is_searchable

    def test_filter_change_resets_page(self) -> None:
        state = CarRentalSearchState()
        state.update(offset=20)

        state.update(transmission="automatic")

        assert state.params.offset == 0

    def test_rental_days(self) -> None:
        state = CarRentalSearchState()
        assert state.rental_days == 0

        state.update(pickup_date="2030-06-14", dropoff_date="2030-06-10")

        assert state.rental_days == 4

    def test_validate_dates_uses_driver_age(self) -> None:
        state = CarRentalSearchState()
        state.update(
            pickup_date="2030-06-10", dropoff_date="2030-06-10", driver_age=17
        )

        result = state.validate_dates(today=date(2030, 1, 1))

        assert result.errors == (DROPOFF_NOT_AFTER_PICKUP, DRIVER_TOO_YOUNG)
        assert state.restrictions.available_categories == ()

    def test_reset(self) -> None:
        state = CarRentalSearchState()
        state.update(pickup_city="tangier", driver_age=30)

        state.reset()

        assert state.params == CarRentalSearchParams()
