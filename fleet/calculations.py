"""Helper functions for rental day counts, cost and late fees."""

from typing import Tuple

from .errors import InvalidRentalDateError

LATE_FEE_PER_DAY = 50.0
ALLOWED_RENTAL_DAYS = 3


def parse_date_parts(text: str) -> Tuple[int, int, int]:
    """Split a dd/mm/yyyy string into (day, month, year)."""
    parts = text.split("/") if text else []
    if len(parts) != 3:
        raise InvalidRentalDateError(f"Invalid date: {text!r}")
    try:
        day, month, year = (int(p) for p in parts)
    except ValueError:
        raise InvalidRentalDateError(f"Invalid date: {text!r}") from None
    return day, month, year


def approx_day_number(text: str) -> int:
    """Rough day number: every year is 365 days, every month 30."""
    day, month, year = parse_date_parts(text)
    return year * 365 + month * 30 + day


def calc_days(start_date: str, end_date: str) -> int:
    """
    Number of billable days between two dd/mm/yyyy dates.

    Uses the 30-day-month approximation, so spans crossing months of other
    lengths are off by a day or two. Never returns less than 1.
    """
    return max(1, approx_day_number(end_date) - approx_day_number(start_date))


def calc_total_cost(rental_days: int, rental_price: float) -> float:
    """Rental cost: days × daily price."""
    return rental_days * rental_price


def calc_late_fee(
    rental_days: int,
    fee_per_day: float = LATE_FEE_PER_DAY,
    allowed_days: int = ALLOWED_RENTAL_DAYS,
) -> float:
    """Fee for each day held past the allowance."""
    late_days = max(0, rental_days - allowed_days)
    return late_days * fee_per_day
