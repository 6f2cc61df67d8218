"""Stay and car rental date range validation."""

from datetime import date, datetime

from tourquery.core.entities.results import RentalValidationResult, ValidationResult
from tourquery.utils.dates import add_years, parse_date

CHECK_IN_IN_PAST = "Check-in date cannot be in the past"
CHECK_OUT_NOT_AFTER_CHECK_IN = "Check-out date must be after check-in date"
CHECK_IN_TOO_FAR = "Check-in date cannot be more than 1 year in advance"
CHECK_IN_INVALID = "Check-in date is invalid"
CHECK_OUT_INVALID = "Check-out date is invalid"

PICKUP_IN_PAST = "Pickup date cannot be in the past"
DROPOFF_NOT_AFTER_PICKUP = "Drop-off date must be after pickup date"
DRIVER_TOO_YOUNG = "Driver must be at least 18 years old"
PICKUP_TOO_FAR = "Pickup date cannot be more than 1 year in advance"
PICKUP_INVALID = "Pickup date is invalid"
DROPOFF_INVALID = "Drop-off date is invalid"

MAX_ADVANCE_YEARS = 1
MIN_DRIVER_AGE = 18
MAX_RENTAL_DAYS = 30
RENTAL_TOO_LONG = f"Rental period cannot exceed {MAX_RENTAL_DAYS} days"


def validate_date_range(
    check_in: str | date | datetime | None,
    check_out: str | date | datetime | None,
    today: date | None = None,
) -> ValidationResult:
    """Validate a stay against today and the booking horizon.

    Every rule is evaluated; all violations are reported in rule order.
    A date that cannot be parsed is reported as invalid and the rules
    that depend on it are skipped.

    Args:
        check_in: Check-in date (``YYYY-MM-DD``, date or datetime).
        check_out: Check-out date (``YYYY-MM-DD``, date or datetime).
        today: Reference day. Defaults to the local current date.

    Returns:
        A ValidationResult listing every violated rule.
    """
    today = today or date.today()
    start = parse_date(check_in)
    end = parse_date(check_out)

    errors: list[str] = []
    if start is None:
        errors.append(CHECK_IN_INVALID)
    if end is None:
        errors.append(CHECK_OUT_INVALID)

    if start is not None and start < today:
        errors.append(CHECK_IN_IN_PAST)

    if start is not None and end is not None and end <= start:
        errors.append(CHECK_OUT_NOT_AFTER_CHECK_IN)

    if start is not None and start > add_years(today, MAX_ADVANCE_YEARS):
        errors.append(CHECK_IN_TOO_FAR)

    return ValidationResult(errors=tuple(errors))


def validate_rental_dates(
    pickup: str | date | datetime | None,
    dropoff: str | date | datetime | None,
    driver_age: int,
    today: date | None = None,
) -> RentalValidationResult:
    """Validate a car rental period and the driver's age.

    Rules are evaluated in order: pickup not in the past, drop-off after
    pickup, minimum driver age, booking horizon, maximum rental length.
    Unparseable dates are reported and skip the rules that need them.

    Returns:
        A RentalValidationResult with every violated rule and the signed
        number of rental days.
    """
    today = today or date.today()
    start = parse_date(pickup)
    end = parse_date(dropoff)

    errors: list[str] = []
    if start is None:
        errors.append(PICKUP_INVALID)
    if end is None:
        errors.append(DROPOFF_INVALID)

    if start is not None and start < today:
        errors.append(PICKUP_IN_PAST)

    if start is not None and end is not None and end <= start:
        errors.append(DROPOFF_NOT_AFTER_PICKUP)

    if driver_age < MIN_DRIVER_AGE:
        errors.append(DRIVER_TOO_YOUNG)

    if start is not None and start > add_years(today, MAX_ADVANCE_YEARS):
        errors.append(PICKUP_TOO_FAR)

    rental_days = 0
    if start is not None and end is not None:
        rental_days = (end - start).days
        if rental_days > MAX_RENTAL_DAYS:
            errors.append(RENTAL_TOO_LONG)

    return RentalValidationResult(errors=tuple(errors), rental_days=rental_days)
