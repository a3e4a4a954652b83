"""Dashboard views over all reservations.

A reservation whose end equals *now* has already ended.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from hallbook.domain.models import (
    CategorizedReservations,
    Reservation,
    ReservationSummary,
)


def categorize(
    reservations: Iterable[Reservation], now: datetime
) -> CategorizedReservations:
    """Split reservations into past, current and upcoming relative to *now*."""
    result = CategorizedReservations()
    for r in reservations:
        if r.end_date <= now:
            result.past.append(r)
        elif r.start_date > now:
            result.upcoming.append(r)
        else:
            result.current.append(r)
    return result


def summarize(reservations: Iterable[Reservation], now: datetime) -> ReservationSummary:
    reservations = list(reservations)
    groups = categorize(reservations, now)
    return ReservationSummary(
        total_reservations=len(reservations),
        past_reservations=len(groups.past),
        current_reservations=len(groups.current),
        upcoming_reservations=len(groups.upcoming),
        total_revenue=round(sum(r.total_cost for r in reservations), 2),
    )
