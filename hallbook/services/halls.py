"""Hall administration with the business checks that sit above the repository."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from hallbook.domain.errors import HallInUse, ValidationError
from hallbook.domain.models import Hall, HallCreate, HallUpdate, utcnow
from hallbook.repos.memory import HallRepository, ReservationRepository

logger = logging.getLogger(__name__)

_NULLABLE = {"available_from", "available_to"}


class HallService:
    def __init__(
        self,
        hall_repo: HallRepository,
        reservation_repo: ReservationRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.hall_repo = hall_repo
        self.reservation_repo = reservation_repo
        self.clock = clock

    def create(self, payload: HallCreate) -> Hall:
        if payload.available_from is not None and payload.available_from < self.clock():
            raise ValidationError("AvailableFrom cannot be in the past")
        hall = self.hall_repo.add(Hall(**payload.model_dump()))
        logger.info("Hall %s created at %s", hall.id, hall.location)
        return hall

    def list_all(self) -> list[Hall]:
        return self.hall_repo.list_all()

    def get(self, hall_id: int) -> Hall:
        return self.hall_repo.get(hall_id)

    def update(self, hall_id: int, payload: HallUpdate) -> Hall:
        """Apply the fields present in *payload*.

        Explicit nulls only clear the availability bounds; other fields keep
        their current value.
        """
        current = self.hall_repo.get(hall_id)
        changes = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE
        }
        new_from = changes.get("available_from")
        if new_from is not None and new_from < self.clock():
            raise ValidationError("AvailableFrom cannot be in the past")
        available_from = changes.get("available_from", current.available_from)
        available_to = changes.get("available_to", current.available_to)
        if available_from is not None and available_to is not None:
            if available_from >= available_to:
                raise ValidationError("AvailableFrom must be before AvailableTo")

        hall = self.hall_repo.update(hall_id, **changes)
        logger.info("Hall %s updated: %s", hall_id, sorted(changes))
        return hall

    def delete(self, hall_id: int) -> None:
        self.hall_repo.get(hall_id)
        if self.reservation_repo.references_hall(hall_id):
            raise HallInUse("Hall has reservations and cannot be deleted")
        self.hall_repo.delete(hall_id)
        logger.info("Hall %s deleted", hall_id)
