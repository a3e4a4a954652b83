"""Reservation pricing."""

from __future__ import annotations

from datetime import datetime

from hallbook.domain.errors import InvalidRate
from hallbook.domain.intervals import duration_days

LONG_STAY_DAYS = 7
LONG_STAY_DISCOUNT = 0.10


def price(
    start: datetime,
    end: datetime,
    per_day_rate: float,
    long_stay_discount: bool = True,
) -> float:
    """Total cost of booking ``[start, end)`` at *per_day_rate*.

    Days are billed whole (at least one). Stays longer than a week get 10%
    off unless *long_stay_discount* is disabled.
    """
    if per_day_rate <= 0:
        raise InvalidRate("Cost per day must be a positive number")

    days = duration_days(start, end)
    total = days * per_day_rate
    if long_stay_discount and days > LONG_STAY_DAYS:
        total -= total * LONG_STAY_DISCOUNT
    return round(total, 2)
