"""Date helpers shared by validation and hotel search state."""

from datetime import date, datetime


def parse_date(value: str | date | datetime | None) -> date | None:
    """Parse a check-in/check-out value into a calendar date.

    Accepts ``YYYY-MM-DD`` strings (or full ISO timestamps), ``date`` and
    ``datetime`` objects. The time of day is discarded.

    Returns:
        The parsed date, or None if the value is empty or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def add_years(day: date, years: int) -> date:
    """Shift a date by whole years, clamping Feb 29 to Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def calculate_nights(
    check_in: str | date | datetime | None,
    check_out: str | date | datetime | None,
) -> int:
    """Number of nights between two dates, 0 if either is missing."""
    start = parse_date(check_in)
    end = parse_date(check_out)
    if start is None or end is None:
        return 0
    return abs((end - start).days)
