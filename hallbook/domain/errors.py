"""Error taxonomy raised by the booking core and translated at the HTTP edge."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hallbook.domain.models import DateRange


class HallbookError(Exception):
    """Base class for all domain/service errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HallbookError):
    """Malformed or logically invalid input. Never retried."""

    status_code = 400


class InvalidRate(ValidationError):
    pass


class InvalidWindow(HallbookError):
    status_code = 400


class ResourceNotFound(HallbookError):
    status_code = 404

    def __init__(self, hall_id: int) -> None:
        super().__init__("Hall not found")
        self.hall_id = hall_id


class ReservationNotFound(HallbookError):
    status_code = 404

    def __init__(self, reservation_id: int) -> None:
        super().__init__("Reservation not found")
        self.reservation_id = reservation_id


class HallInUse(HallbookError):
    status_code = 409


class ConflictError(HallbookError):
    """The requested range overlaps a confirmed reservation of the same hall."""

    status_code = 409

    def __init__(
        self,
        message: str = "Hall is already booked for these dates",
        conflicting_ids: list[int] | None = None,
        suggestions: list[DateRange] | None = None,
    ) -> None:
        super().__init__(message)
        self.conflicting_ids = conflicting_ids or []
        self.suggestions = suggestions or []


class StorageUnavailable(HallbookError):
    """The storage collaborator cannot serve the request. Callers decide on retry."""

    status_code = 503
