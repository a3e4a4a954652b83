"""Domain events emitted during the reservation lifecycle."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ReservationCreated(BaseModel):
    """Fired after a new reservation is persisted."""

    reservation_id: int


class ReservationUpdated(BaseModel):
    """Fired after a reservation's dates, hall or requester change."""

    reservation_id: int


class ReservationCancelled(BaseModel):
    """Fired after a reservation is deleted and its dates released."""

    reservation_id: int
    hall_id: int


class ConflictDetected(BaseModel):
    """Fired when a requested range overlaps confirmed reservations."""

    hall_id: int
    start_date: datetime
    end_date: datetime
    conflicting_reservation_ids: list[int]
    suggestion_count: int = 0
