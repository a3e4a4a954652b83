"""Service for suggesting alternative dates when a hall is already booked."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta

from hallbook.domain.errors import ValidationError
from hallbook.domain.intervals import overlaps
from hallbook.domain.models import DateRange, Reservation

DEFAULT_SEARCH_DAYS = 30


def suggest(
    reservations: Iterable[Reservation],
    requested_start: datetime,
    requested_end: datetime,
    search_before: timedelta = timedelta(days=DEFAULT_SEARCH_DAYS),
    search_after: timedelta = timedelta(days=DEFAULT_SEARCH_DAYS),
    not_before: datetime | None = None,
    not_after: datetime | None = None,
) -> Iterator[DateRange]:
    """Yield free ranges as long as the requested one, earliest first.

    The search window runs from *search_before* ahead of the requested start
    to *search_after* past the requested end, optionally narrowed by
    *not_before* / *not_after*. Each free gap in the window that can hold the
    requested duration produces one suggestion anchored at the gap's start.
    *reservations* are the confirmed bookings of a single hall.
    """
    duration = requested_end - requested_start
    if duration <= timedelta(0):
        raise ValidationError("Start date must be before end date")

    window_start = requested_start - search_before
    window_end = requested_end + search_after
    if not_before is not None:
        window_start = max(window_start, not_before)
    if not_after is not None:
        window_end = min(window_end, not_after)

    in_window = sorted(
        (
            r
            for r in reservations
            if overlaps(window_start, window_end, r.start_date, r.end_date)
        ),
        key=lambda r: (r.start_date, r.id),
    )
    return _walk_gaps(in_window, requested_start, duration, window_start, window_end)


def _walk_gaps(
    booked: list[Reservation],
    requested_start: datetime,
    duration: timedelta,
    window_start: datetime,
    window_end: datetime,
) -> Iterator[DateRange]:
    if not booked:
        if window_start <= requested_start and requested_start + duration <= window_end:
            yield DateRange(start=requested_start, end=requested_start + duration)
        elif window_end - window_start >= duration:
            yield DateRange(start=window_start, end=window_start + duration)
        return

    # cursor is the end of everything booked so far
    cursor = window_start
    for r in booked:
        if r.start_date - cursor >= duration:
            yield DateRange(start=cursor, end=cursor + duration)
        cursor = max(cursor, r.end_date)

    if window_end - cursor >= duration:
        yield DateRange(start=cursor, end=cursor + duration)
