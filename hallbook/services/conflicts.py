"""Service for detecting double-bookings of a hall."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from hallbook.domain.intervals import overlaps
from hallbook.domain.models import Reservation


def find_conflicts(
    new_start: datetime,
    new_end: datetime,
    existing: Iterable[Reservation],
) -> list[Reservation]:
    """Return existing reservations that overlap ``[new_start, new_end)``.

    Overlap rule: new_start < existing.end_date AND existing.start_date < new_end.
    A reservation ending exactly when the new one starts is NOT a conflict.
    """
    return [
        r for r in existing if overlaps(new_start, new_end, r.start_date, r.end_date)
    ]


def has_conflict(
    reservations: Iterable[Reservation],
    hall_id: int,
    start: datetime,
    end: datetime,
    exclude_id: int | None = None,
) -> bool:
    """True if any reservation of *hall_id* other than *exclude_id* overlaps.

    *exclude_id* is the reservation being modified in place, so moving a
    booking over its own old dates never conflicts with itself.
    """
    same_hall = (
        r for r in reservations if r.hall_id == hall_id and r.id != exclude_id
    )
    return bool(find_conflicts(start, end, same_hall))
