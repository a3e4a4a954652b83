"""In-memory repositories for halls and reservations."""

from __future__ import annotations

import itertools
import threading
from datetime import date, datetime, time, timezone
from typing import Any

from hallbook.domain.errors import (
    ConflictError,
    ReservationNotFound,
    ResourceNotFound,
    StorageUnavailable,
)
from hallbook.domain.intervals import ONE_DAY, overlaps
from hallbook.domain.models import Hall, Reservation, SortField, SortOrder


class _Repository:
    """Shared id sequence, lock and persistence switch."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def _ensure_enabled(self) -> None:
        if not self._enabled:
            raise StorageUnavailable("Database is disabled")


class HallRepository(_Repository):
    """Dict-backed store for Hall instances, keyed by id."""

    def __init__(self, enabled: bool = True) -> None:
        super().__init__(enabled)
        self._store: dict[int, Hall] = {}

    def add(self, hall: Hall) -> Hall:
        self._ensure_enabled()
        with self._lock:
            hall.id = next(self._ids)
            self._store[hall.id] = hall
        return hall

    def get(self, hall_id: int) -> Hall:
        self._ensure_enabled()
        hall = self._store.get(hall_id)
        if hall is None:
            raise ResourceNotFound(hall_id)
        return hall

    def list_all(self) -> list[Hall]:
        self._ensure_enabled()
        return sorted(self._store.values(), key=lambda h: h.id)

    def update(self, hall_id: int, **fields: Any) -> Hall:
        """Replace the stored hall with a re-validated copy carrying *fields*."""
        with self._lock:
            current = self.get(hall_id)
            updated = Hall.model_validate({**current.model_dump(), **fields, "id": hall_id})
            self._store[hall_id] = updated
        return updated

    def delete(self, hall_id: int) -> None:
        with self._lock:
            self.get(hall_id)
            del self._store[hall_id]


class ReservationRepository(_Repository):
    """Dict-backed store for Reservation instances, keyed by id.

    ``insert`` and ``update`` re-check the non-overlap invariant under the
    repository lock, so two racing requests for the same range cannot both
    commit even though each passed the service-level conflict check.
    """

    def __init__(self, enabled: bool = True) -> None:
        super().__init__(enabled)
        self._store: dict[int, Reservation] = {}

    def get(self, reservation_id: int) -> Reservation:
        self._ensure_enabled()
        reservation = self._store.get(reservation_id)
        if reservation is None:
            raise ReservationNotFound(reservation_id)
        return reservation

    def list_all(self) -> list[Reservation]:
        self._ensure_enabled()
        return sorted(self._store.values(), key=lambda r: r.id)

    def list_intervals(
        self,
        hall_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
        exclude_id: int | None = None,
    ) -> list[Reservation]:
        """Reservations of *hall_id*, optionally only those touching ``[start, end)``.

        Ordered by start, ties broken by the lower id.
        """
        self._ensure_enabled()
        with self._lock:
            snapshot = list(self._store.values())
        found = []
        for r in snapshot:
            if r.hall_id != hall_id or r.id == exclude_id:
                continue
            if start is not None and r.end_date <= start:
                continue
            if end is not None and r.start_date >= end:
                continue
            found.append(r)
        return sorted(found, key=lambda r: (r.start_date, r.id))

    def references_hall(self, hall_id: int) -> bool:
        self._ensure_enabled()
        return any(r.hall_id == hall_id for r in list(self._store.values()))

    def insert(self, reservation: Reservation) -> Reservation:
        """Store *reservation* under a fresh id unless it overlaps another one."""
        with self._lock:
            self._raise_on_overlap(reservation)
            reservation.id = next(self._ids)
            self._store[reservation.id] = reservation
        return reservation

    def update(self, reservation_id: int, **fields: Any) -> Reservation:
        """Apply *fields* to a reservation, re-validating dates and overlap."""
        with self._lock:
            current = self.get(reservation_id)
            updated = Reservation.model_validate(
                {**current.model_dump(), **fields, "id": reservation_id}
            )
            self._raise_on_overlap(updated, exclude_id=reservation_id)
            self._store[reservation_id] = updated
        return updated

    def delete(self, reservation_id: int) -> Reservation:
        with self._lock:
            reservation = self.get(reservation_id)
            del self._store[reservation_id]
        return reservation

    def search(
        self,
        on_date: date | None = None,
        company: str | None = None,
        hall_id: int | None = None,
        sort_by: SortField | None = None,
        order: SortOrder = SortOrder.ASC,
    ) -> list[Reservation]:
        """Filter and sort reservations for listing.

        *on_date* keeps reservations covering any part of that UTC day and
        *company* matches case-insensitively.
        """
        results = self.list_all()
        if on_date is not None:
            day_start = datetime.combine(on_date, time.min, tzinfo=timezone.utc)
            results = [
                r
                for r in results
                if overlaps(day_start, day_start + ONE_DAY, r.start_date, r.end_date)
            ]
        if company:
            wanted = company.casefold()
            results = [r for r in results if r.company.casefold() == wanted]
        if hall_id is not None:
            results = [r for r in results if r.hall_id == hall_id]
        if sort_by is not None:
            results.sort(
                key=lambda r: getattr(r, sort_by.value),
                reverse=order == SortOrder.DESC,
            )
        return results

    def _raise_on_overlap(
        self, reservation: Reservation, exclude_id: int | None = None
    ) -> None:
        clashing = [
            other.id
            for other in self.list_intervals(
                reservation.hall_id,
                reservation.start_date,
                reservation.end_date,
                exclude_id=exclude_id,
            )
        ]
        if clashing:
            raise ConflictError(conflicting_ids=clashing)
