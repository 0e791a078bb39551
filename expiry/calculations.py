"""Helper functions for calendar-day expiry calculations."""

from datetime import date, datetime
from typing import Callable, Optional, Union

Clock = Callable[[], Union[date, datetime]]


def as_day(value: Union[date, datetime]) -> date:
    """Truncate a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def system_clock() -> date:
    """Today's date from the system clock."""
    return date.today()


def today(clock: Optional[Clock] = None) -> date:
    """Read the injected clock (or the system clock) as a calendar date."""
    return as_day((clock or system_clock)())


def days_until(expiry_date: date, current_date: date) -> int:
    """
    Signed number of calendar days from current_date to expiry_date.

    Both dates are day-truncated, so this equals the ceiling of the
    fractional day delta. Negative means already past.
    """
    return (as_day(expiry_date) - as_day(current_date)).days
