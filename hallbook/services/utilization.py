"""Service for reporting how much of an observation window a hall was booked."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone

from dateutil.rrule import DAILY, rrule

from hallbook.domain.errors import InvalidWindow
from hallbook.domain.intervals import ONE_DAY, overlaps
from hallbook.domain.models import Reservation, UtilizationReport


def default_window(today: date, days: int = 30) -> tuple[date, date]:
    """The trailing *days* days ending with *today*."""
    return today - timedelta(days=days), today


def covered_days(
    reservations: Iterable[Reservation], window_start: date, window_end: date
) -> set[date]:
    """Calendar days of the closed window touched by any reservation.

    A reservation covers every day holding at least one instant of its
    half-open range, so ``[Jun 10, Jun 15)`` covers Jun 10 through Jun 14.
    """
    lo = datetime.combine(window_start, time.min, tzinfo=timezone.utc)
    hi = datetime.combine(window_end, time.min, tzinfo=timezone.utc) + ONE_DAY

    days: set[date] = set()
    for r in reservations:
        if not overlaps(lo, hi, r.start_date, r.end_date):
            continue
        first = max(lo, r.start_date)
        last = min(hi, r.end_date) - timedelta(microseconds=1)
        for day in rrule(
            DAILY,
            dtstart=datetime.combine(first.date(), time.min),
            until=datetime.combine(last.date(), time.min),
        ):
            days.add(day.date())
    return days


def utilization(
    reservations: Iterable[Reservation],
    hall_id: int,
    window_start: date,
    window_end: date,
) -> UtilizationReport:
    """Share of days in ``[window_start, window_end]`` (both inclusive) booked.

    Days are counted once even if two reservations meet on the same day,
    so ``booked_days`` never exceeds ``total_days``.
    """
    if window_end < window_start:
        raise InvalidWindow("end_date must not be before start_date")

    total_days = (window_end - window_start).days + 1
    booked_days = len(covered_days(reservations, window_start, window_end))
    return UtilizationReport(
        hall_id=hall_id,
        period_start=window_start,
        period_end=window_end,
        total_days=total_days,
        booked_days=booked_days,
        utilization_rate=booked_days / total_days * 100,
    )
