"""Domain event handlers, wired up at application startup."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from hallbook.config import Settings
from hallbook.domain.bus import EventBus
from hallbook.domain.events import (
    ConflictDetected,
    ReservationCancelled,
    ReservationCreated,
    ReservationUpdated,
)
from hallbook.domain.models import utcnow
from hallbook.repos.memory import ReservationRepository
from hallbook.services.receipts import delete_receipt, write_receipt

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Wires reservation-event handlers to the bus."""

    def __init__(
        self,
        bus: EventBus,
        reservation_repo: ReservationRepository,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.bus = bus
        self.reservation_repo = reservation_repo
        self.settings = settings
        self.clock = clock
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(ReservationCreated, self.on_reservation_created)
        self.bus.subscribe(ReservationUpdated, self.on_reservation_updated)
        self.bus.subscribe(ReservationCancelled, self.on_reservation_cancelled)
        self.bus.subscribe(ConflictDetected, self.on_conflict_detected)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_reservation_created(self, event: ReservationCreated) -> None:
        self._refresh_receipt(event.reservation_id)

    def on_reservation_updated(self, event: ReservationUpdated) -> None:
        self._refresh_receipt(event.reservation_id)

    def on_reservation_cancelled(self, event: ReservationCancelled) -> None:
        if not self.settings.receipts_enabled:
            return
        try:
            delete_receipt(self.settings.receipt_dir, event.reservation_id)
        except OSError:
            logger.exception(
                "Reservation %s deleted, but failed to delete receipt",
                event.reservation_id,
            )

    def on_conflict_detected(self, event: ConflictDetected) -> None:
        logger.info(
            "Hall %s already booked for %s - %s (conflicts: %s, suggestions: %d)",
            event.hall_id,
            event.start_date.isoformat(),
            event.end_date.isoformat(),
            event.conflicting_reservation_ids,
            event.suggestion_count,
        )

    def _refresh_receipt(self, reservation_id: int) -> None:
        if not self.settings.receipts_enabled:
            return
        reservation = self.reservation_repo.get(reservation_id)
        try:
            write_receipt(
                reservation,
                self.settings.receipt_dir,
                self.settings.currency,
                generated_at=self.clock(),
            )
        except OSError:
            # the reservation is already committed; only the receipt is missing
            logger.exception(
                "Reservation %s saved, but failed to generate receipt", reservation_id
            )
