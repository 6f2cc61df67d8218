"""Tests for check-in / check-out validation."""

from datetime import date, datetime

import pytest

from tourquery import validate_date_range, validate_rental_dates
from tourquery.core.services.date_validation import (
    CHECK_IN_IN_PAST,
    CHECK_IN_INVALID,
    CHECK_IN_TOO_FAR,
    CHECK_OUT_INVALID,
    CHECK_OUT_NOT_AFTER_CHECK_IN,
    DRIVER_TOO_YOUNG,
    DROPOFF_INVALID,
    DROPOFF_NOT_AFTER_PICKUP,
    PICKUP_IN_PAST,
    PICKUP_TOO_FAR,
    RENTAL_TOO_LONG,
)
from tourquery.utils.dates import add_years, calculate_nights, parse_date

TODAY = date(2025, 1, 1)


class TestValidateDateRange:
    """Tests for validate_date_range."""

    def test_valid_range(self) -> None:
        result = validate_date_range("2025-03-01", "2025-03-05", today=TODAY)

        assert result.is_valid
        assert result.errors == ()

    def test_check_in_today_is_allowed(self) -> None:
        assert validate_date_range("2025-01-01", "2025-01-02", today=TODAY).is_valid

    def test_past_check_in(self) -> None:
        result = validate_date_range("2020-01-01", "2020-01-02", today=TODAY)

        assert not result.is_valid
        assert result.errors == (CHECK_IN_IN_PAST,)

    def test_check_out_before_check_in(self) -> None:
        result = validate_date_range("2025-01-10", "2025-01-05", today=TODAY)

        assert result.errors == (CHECK_OUT_NOT_AFTER_CHECK_IN,)

    def test_same_day_check_out(self) -> None:
        result = validate_date_range("2025-01-10", "2025-01-10", today=TODAY)

        assert result.errors == (CHECK_OUT_NOT_AFTER_CHECK_IN,)

    def test_check_in_too_far(self) -> None:
        result = validate_date_range("2026-01-02", "2026-01-05", today=TODAY)

        assert result.errors == (CHECK_IN_TOO_FAR,)

    def test_exactly_one_year_ahead_is_allowed(self) -> None:
        assert validate_date_range("2026-01-01", "2026-01-03", today=TODAY).is_valid

    def test_errors_accumulate_in_rule_order(self) -> None:
        result = validate_date_range("2024-12-20", "2024-12-10", today=TODAY)

        assert result.errors == (CHECK_IN_IN_PAST, CHECK_OUT_NOT_AFTER_CHECK_IN)

    def test_too_far_and_inverted(self) -> None:
        result = validate_date_range("2027-05-10", "2027-05-01", today=TODAY)

        assert result.errors == (CHECK_OUT_NOT_AFTER_CHECK_IN, CHECK_IN_TOO_FAR)

    @pytest.mark.parametrize(
        "check_in,check_out,expected",
        [
            ("", "2025-02-01", (CHECK_IN_INVALID,)),
            ("2025-02-01", "not a date", (CHECK_OUT_INVALID,)),
            (None, None, (CHECK_IN_INVALID, CHECK_OUT_INVALID)),
            ("2025-02-30", "2025-03-02", (CHECK_IN_INVALID,)),
        ],
    )
    def test_unparseable_dates(self, check_in, check_out, expected) -> None:
        assert validate_date_range(check_in, check_out, today=TODAY).errors == expected

    def test_accepts_date_objects(self) -> None:
        result = validate_date_range(
            date(2025, 2, 1), datetime(2025, 2, 3, 15, 30), today=TODAY
        )

        assert result.is_valid


class TestValidateRentalDates:
    """Tests for validate_rental_dates."""

    def test_valid_rental(self) -> None:
        result = validate_rental_dates("2025-03-01", "2025-03-05", 30, today=TODAY)

        assert result.is_valid
        assert result.rental_days == 4

    def test_messages(self) -> None:
        assert RENTAL_TOO_LONG == "Rental period cannot exceed 30 days"
        assert DRIVER_TOO_YOUNG == "Driver must be at least 18 years old"

    def test_past_pickup_and_young_driver(self) -> None:
        result = validate_rental_dates("2024-12-30", "2025-01-03", 17, today=TODAY)

        assert result.errors == (PICKUP_IN_PAST, DRIVER_TOO_YOUNG)

    def test_eighteen_is_old_enough(self) -> None:
        result = validate_rental_dates("2025-02-01", "2025-02-02", 18, today=TODAY)

        assert result.is_valid

    def test_thirty_days_is_the_limit(self) -> None:
        longest = validate_rental_dates("2025-02-01", "2025-03-03", 25, today=TODAY)
        result = validate_rental_dates("2025-02-01", "2025-03-04", 25, today=TODAY)

        assert longest.is_valid
        assert result.errors == (RENTAL_TOO_LONG,)
        assert result.rental_days == 31

    def test_rules_in_order(self) -> None:
        result = validate_rental_dates("2026-03-10", "2026-03-01", 16, today=TODAY)

        assert result.errors == (
            DROPOFF_NOT_AFTER_PICKUP,
            DRIVER_TOO_YOUNG,
            PICKUP_TOO_FAR,
        )
        assert result.rental_days == -9

    def test_unparseable_dropoff(self) -> None:
        result = validate_rental_dates("2025-02-01", "soon", 30, today=TODAY)

        assert result.errors == (DROPOFF_INVALID,)
        assert result.rental_days == 0


class TestDateHelpers:
    """Tests for the date utilities."""

    def test_add_years_clamps_leap_day(self) -> None:
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)

    @pytest.mark.parametrize(
        "check_in,check_out,nights",
        [
            ("2025-06-10", "2025-06-14", 4),
            ("2025-06-14", "2025-06-10", 4),
            ("2025-06-10T14:00:00", "2025-06-11", 1),
            ("", "2025-06-11", 0),
        ],
    )
    def test_calculate_nights(self, check_in, check_out, nights) -> None:
        assert calculate_nights(check_in, check_out) == nights

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2025-01-10", date(2025, 1, 10)),
            (" 2025-01-10 ", date(2025, 1, 10)),
            ("2025-01-10T14:00:00", date(2025, 1, 10)),
            ("2025-01-10T14:00:00Z", date(2025, 1, 10)),
            ("2025-01-10 14:00", date(2025, 1, 10)),
            ("2025-01-10xyz", None),
            ("2025-01-10Tnoon", None),
            ("2025-1-10", None),
        ],
    )
    def test_parse_date_rejects_trailing_garbage(self, text, expected) -> None:
        assert parse_date(text) == expected
