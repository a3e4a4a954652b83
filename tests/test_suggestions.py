"""Tests for alternative-date suggestions."""

from datetime import datetime, timedelta, timezone

import pytest

from hallbook.domain.errors import ValidationError
from hallbook.domain.models import Reservation
from hallbook.services.conflicts import has_conflict
from hallbook.services.suggestions import suggest


def _d(month: int, day: int, hour: int = 0) -> datetime:
    return datetime(2025, month, day, hour, tzinfo=timezone.utc)


def _booked(*ranges: tuple[datetime, datetime]) -> list[Reservation]:
    return [
        Reservation(id=i, hall_id=1, name=f"Booking {i}", start_date=s, end_date=e)
        for i, (s, e) in enumerate(ranges, start=1)
    ]


def test_empty_hall_suggests_requested_range():
    result = list(suggest([], _d(6, 3), _d(6, 5)))
    assert [(r.start, r.end) for r in result] == [(_d(6, 3), _d(6, 5))]


def test_gaps_before_and_after_a_booking():
    booked = _booked((_d(6, 1), _d(6, 10)))
    result = list(suggest(booked, _d(6, 3), _d(6, 5)))

    assert [(r.start, r.end) for r in result] == [
        (_d(5, 4), _d(5, 6)),
        (_d(6, 10), _d(6, 12)),
    ]


def test_not_before_drops_suggestions_in_the_past():
    booked = _booked((_d(6, 1), _d(6, 10)))
    result = list(suggest(booked, _d(6, 3), _d(6, 5), not_before=_d(6, 2)))

    assert result[0].start >= _d(6, 10)
    assert [(r.start, r.end) for r in result] == [(_d(6, 10), _d(6, 12))]


def test_gap_between_bookings_must_fit_duration():
    booked = _booked(
        (_d(6, 1), _d(6, 5)),
        (_d(6, 6), _d(6, 8)),  # 1-day gap before this one is too short
        (_d(6, 10), _d(6, 20)),
    )
    result = list(suggest(booked, _d(6, 2), _d(6, 4), not_before=_d(6, 1)))

    assert [(r.start, r.end) for r in result] == [
        (_d(6, 8), _d(6, 10)),
        (_d(6, 20), _d(6, 22)),
    ]


def test_unsorted_input_is_walked_in_start_order():
    booked = _booked((_d(6, 10), _d(6, 20)), (_d(6, 1), _d(6, 8)))
    result = list(suggest(booked, _d(6, 2), _d(6, 4), not_before=_d(6, 1)))
    starts = [r.start for r in result]
    assert starts == sorted(starts)
    assert starts[0] == _d(6, 8)


def test_duration_is_preserved_exactly():
    booked = _booked((_d(6, 1), _d(6, 10)))
    start, end = _d(6, 3, 9), _d(6, 4, 21)
    for r in suggest(booked, start, end):
        assert r.end - r.start == end - start


def test_no_gap_yields_nothing():
    booked = _booked((_d(6, 1), _d(6, 30)))
    result = suggest(
        booked,
        _d(6, 10),
        _d(6, 12),
        search_before=timedelta(days=1),
        search_after=timedelta(days=1),
    )
    assert list(result) == []


def test_bookings_outside_window_are_ignored():
    booked = _booked((_d(1, 1), _d(1, 20)), (_d(6, 1), _d(6, 10)))
    result = list(suggest(booked, _d(6, 3), _d(6, 5), not_before=_d(6, 2)))
    assert [r.start for r in result] == [_d(6, 10)]


def test_not_after_caps_the_window():
    booked = _booked((_d(6, 1), _d(6, 10)))
    result = list(
        suggest(booked, _d(6, 3), _d(6, 5), not_before=_d(6, 2), not_after=_d(6, 11))
    )
    assert result == []


def test_suggestions_are_lazy():
    booked = _booked((_d(6, 1), _d(6, 10)))
    result = suggest(booked, _d(6, 3), _d(6, 5))
    first = next(result)
    assert first.start == _d(5, 4)


def test_invalid_range_rejected():
    with pytest.raises(ValidationError):
        suggest([], _d(6, 5), _d(6, 5))


def test_suggestions_never_conflict():
    booked = _booked(
        (_d(6, 1), _d(6, 4)),
        (_d(6, 7), _d(6, 9, 12)),
        (_d(6, 12), _d(6, 13)),
        (_d(6, 20), _d(7, 2)),
    )
    start, end = _d(6, 8), _d(6, 10, 6)
    result = list(suggest(booked, start, end))

    assert result
    for r in result:
        assert not has_conflict(booked, 1, r.start, r.end)
