"""Tests for hall utilization reports."""

from datetime import date, datetime, timezone

import pytest

from hallbook.domain.errors import InvalidWindow
from hallbook.domain.models import Reservation
from hallbook.services.utilization import covered_days, default_window, utilization


def _r(start: datetime, end: datetime, id: int = 1) -> Reservation:
    return Reservation(id=id, hall_id=1, name="Client", start_date=start, end_date=end)


def _utc(month: int, day: int, hour: int = 0) -> datetime:
    return datetime(2025, month, day, hour, tzinfo=timezone.utc)


def test_single_booking_inside_window():
    report = utilization(
        [_r(_utc(6, 10), _utc(6, 15))], 1, date(2025, 6, 1), date(2025, 6, 30)
    )
    assert report.total_days == 30
    assert report.booked_days == 5
    assert report.utilization_rate == pytest.approx(16.67, abs=0.01)


def test_empty_hall_is_zero():
    report = utilization([], 1, date(2025, 6, 1), date(2025, 6, 30))
    assert report.booked_days == 0
    assert report.utilization_rate == 0


def test_booking_clamped_at_window_edges():
    bookings = [
        _r(_utc(5, 25), _utc(6, 3), id=1),  # Jun 1-2 inside
        _r(_utc(6, 28), _utc(7, 5), id=2),  # Jun 28-30 inside
    ]
    report = utilization(bookings, 1, date(2025, 6, 1), date(2025, 6, 30))
    assert report.booked_days == 5


def test_booking_spanning_whole_window_is_full():
    report = utilization(
        [_r(_utc(5, 1), _utc(8, 1))], 1, date(2025, 6, 1), date(2025, 6, 30)
    )
    assert report.booked_days == report.total_days == 30
    assert report.utilization_rate == 100


def test_shared_calendar_day_counted_once():
    bookings = [
        _r(_utc(6, 10, 8), _utc(6, 10, 12), id=1),
        _r(_utc(6, 10, 14), _utc(6, 11, 10), id=2),
    ]
    assert covered_days(bookings, date(2025, 6, 1), date(2025, 6, 30)) == {
        date(2025, 6, 10),
        date(2025, 6, 11),
    }


def test_booking_touching_window_start_is_not_counted():
    report = utilization(
        [_r(_utc(5, 20), _utc(6, 1))], 1, date(2025, 6, 1), date(2025, 6, 30)
    )
    assert report.booked_days == 0


def test_single_day_window():
    report = utilization(
        [_r(_utc(6, 10), _utc(6, 11))], 1, date(2025, 6, 10), date(2025, 6, 10)
    )
    assert report.total_days == 1
    assert report.booked_days == 1


def test_inverted_window_rejected():
    with pytest.raises(InvalidWindow):
        utilization([], 1, date(2025, 6, 30), date(2025, 6, 1))


def test_default_window_is_trailing_thirty_days():
    assert default_window(date(2025, 6, 30)) == (date(2025, 5, 31), date(2025, 6, 30))
