"""Tests for the interval primitives and the Reservation model invariant."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from hallbook.domain.intervals import duration_days, overlaps
from hallbook.domain.models import Reservation

_T0 = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("length", "expected"),
    [
        (timedelta(hours=1), 1),
        (timedelta(days=1), 1),
        (timedelta(days=1, seconds=1), 2),
        (timedelta(days=3), 3),
        (timedelta(days=7, hours=12), 8),
    ],
)
def test_duration_days_rounds_up(length, expected):
    assert duration_days(_T0, _T0 + length) == expected


def test_duration_days_is_monotonic_and_at_least_one():
    previous = 0
    for hours in range(0, 24 * 10, 5):
        days = duration_days(_T0, _T0 + timedelta(hours=hours))
        assert days >= 1
        assert days >= previous
        previous = days


def test_overlaps_half_open():
    a_start, a_end = _T0, _T0 + timedelta(days=2)
    assert overlaps(a_start, a_end, _T0 + timedelta(days=1), _T0 + timedelta(days=3))
    assert not overlaps(a_start, a_end, a_end, a_end + timedelta(days=1))
    assert not overlaps(a_end, a_end + timedelta(days=1), a_start, a_end)


def test_overlaps_is_symmetric():
    a = (_T0, _T0 + timedelta(days=5))
    b = (_T0 + timedelta(days=4), _T0 + timedelta(days=6))
    assert overlaps(*a, *b) == overlaps(*b, *a)


def test_reservation_rejects_end_before_start():
    with pytest.raises(ValidationError):
        Reservation(hall_id=1, name="x", start_date=_T0, end_date=_T0)


def test_reservation_naive_dates_are_utc():
    r = Reservation(
        hall_id=1,
        name="x",
        start_date=datetime(2025, 6, 1),
        end_date=datetime(2025, 6, 2),
    )
    assert r.start_date == _T0
    assert r.start_date.tzinfo is not None
