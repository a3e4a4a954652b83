"""Booking workflow: create, modify and cancel reservations of a hall.

``BookingService`` is the entry point request handlers call. It validates
the requested range, checks it against the hall's confirmed reservations,
prices it and hands it to the repository, which repeats the overlap check
atomically while storing. On a conflict the raised ``ConflictError`` carries
suggested alternative ranges from the gap finder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time, timedelta

from hallbook.config import Settings
from hallbook.domain.bus import EventBus
from hallbook.domain.errors import ConflictError, ValidationError
from hallbook.domain.events import (
    ConflictDetected,
    ReservationCancelled,
    ReservationCreated,
    ReservationUpdated,
)
from hallbook.domain.intervals import ONE_DAY, duration_days
from hallbook.domain.models import (
    BookingDetails,
    CategorizedReservations,
    DateRange,
    Hall,
    Requester,
    Reservation,
    ReservationSummary,
    SortField,
    SortOrder,
    UtilizationReport,
    as_utc,
    utcnow,
)
from hallbook.repos.memory import HallRepository, ReservationRepository
from hallbook.services.conflicts import find_conflicts, has_conflict
from hallbook.services.pricing import price
from hallbook.services.suggestions import suggest
from hallbook.services.summary import categorize, summarize
from hallbook.services.utilization import default_window, utilization

logger = logging.getLogger(__name__)


def booking_details(reservation: Reservation) -> BookingDetails:
    """Billable days and the effective (post-discount) daily cost."""
    days = duration_days(reservation.start_date, reservation.end_date)
    return BookingDetails(
        duration_days=days, cost_per_day=round(reservation.total_cost / days, 2)
    )


def _validate_range(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    start, end = as_utc(start), as_utc(end)
    if start >= end:
        raise ValidationError("Start date must be before end date")
    return start, end


def _next_midnight(now: datetime) -> datetime:
    """*now* itself when it falls on midnight, otherwise the following one."""
    midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    return midnight if midnight == now else midnight + ONE_DAY


class BookingService:
    def __init__(
        self,
        hall_repo: HallRepository,
        reservation_repo: ReservationRepository,
        bus: EventBus,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.hall_repo = hall_repo
        self.reservation_repo = reservation_repo
        self.bus = bus
        self.settings = settings
        self.clock = clock

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit_booking(
        self, hall_id: int, start: datetime, end: datetime, requester: Requester
    ) -> Reservation:
        start, end = _validate_range(start, end)
        now = self.clock()
        if start < now:
            raise ValidationError("Start date cannot be in the past")

        hall = self.hall_repo.get(hall_id)
        self._ensure_bookable(hall, start, end)

        existing = self.reservation_repo.list_intervals(hall_id)
        conflicts = find_conflicts(start, end, existing)
        if conflicts:
            raise self._conflict(hall, start, end, existing, [c.id for c in conflicts])

        reservation = Reservation(
            hall_id=hall_id,
            name=requester.name,
            company=requester.company,
            start_date=start,
            end_date=end,
            total_cost=self._price(hall, start, end),
            created_at=now,
        )
        try:
            self.reservation_repo.insert(reservation)
        except ConflictError as exc:
            # another request committed an overlapping range after our check
            existing = self.reservation_repo.list_intervals(hall_id)
            raise self._conflict(hall, start, end, existing, exc.conflicting_ids) from exc

        logger.info(
            "Reservation %s created for hall %s (%s - %s, cost %.2f)",
            reservation.id,
            hall_id,
            start.date(),
            end.date(),
            reservation.total_cost,
        )
        self.bus.publish(ReservationCreated(reservation_id=reservation.id))
        return reservation

    def modify_booking(
        self,
        reservation_id: int,
        new_start: datetime,
        new_end: datetime,
        hall_id: int | None = None,
        requester: Requester | None = None,
    ) -> Reservation:
        """Move a reservation to new dates (and optionally another hall).

        Only the *other* reservations of the target hall are checked, so
        shifting a booking over its own previous dates is allowed.
        """
        current = self.reservation_repo.get(reservation_id)
        start, end = _validate_range(new_start, new_end)
        target_hall_id = current.hall_id if hall_id is None else hall_id

        hall = self.hall_repo.get(target_hall_id)
        self._ensure_bookable(hall, start, end)

        others = self.reservation_repo.list_intervals(
            target_hall_id, exclude_id=reservation_id
        )
        conflicts = find_conflicts(start, end, others)
        if conflicts:
            raise self._conflict(
                hall,
                start,
                end,
                others,
                [c.id for c in conflicts],
                message="The hall is already booked for the selected dates",
            )

        fields: dict = {
            "hall_id": target_hall_id,
            "start_date": start,
            "end_date": end,
            "total_cost": self._price(hall, start, end),
        }
        if requester is not None:
            fields["name"] = requester.name
            fields["company"] = requester.company

        try:
            updated = self.reservation_repo.update(reservation_id, **fields)
        except ConflictError as exc:
            others = self.reservation_repo.list_intervals(
                target_hall_id, exclude_id=reservation_id
            )
            raise self._conflict(
                hall,
                start,
                end,
                others,
                exc.conflicting_ids,
                message="The hall is already booked for the selected dates",
            ) from exc

        logger.info(
            "Reservation %s moved to hall %s (%s - %s)",
            reservation_id,
            target_hall_id,
            start.date(),
            end.date(),
        )
        self.bus.publish(ReservationUpdated(reservation_id=reservation_id))
        return updated

    def cancel_booking(self, reservation_id: int) -> Reservation:
        removed = self.reservation_repo.delete(reservation_id)
        logger.info("Reservation %s cancelled", reservation_id)
        self.bus.publish(
            ReservationCancelled(reservation_id=reservation_id, hall_id=removed.hall_id)
        )
        return removed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def check_conflict(
        self,
        hall_id: int,
        start: datetime,
        end: datetime,
        exclude_id: int | None = None,
    ) -> bool:
        start, end = _validate_range(start, end)
        self.hall_repo.get(hall_id)
        return has_conflict(
            self.reservation_repo.list_intervals(hall_id),
            hall_id,
            start,
            end,
            exclude_id=exclude_id,
        )

    def suggest_dates(
        self, hall_id: int, start: datetime, end: datetime
    ) -> list[DateRange]:
        start, end = _validate_range(start, end)
        hall = self.hall_repo.get(hall_id)
        return self._suggestions(hall, start, end, self.reservation_repo.list_intervals(hall_id))

    def get_utilization(
        self,
        hall_id: int,
        window_start: date | None = None,
        window_end: date | None = None,
    ) -> UtilizationReport:
        """Utilization of *hall_id*; missing bounds default to the trailing window."""
        self.hall_repo.get(hall_id)
        days = self.settings.utilization_window_days
        if window_end is None:
            window_end = self.clock().date()
        if window_start is None:
            window_start, _ = default_window(window_end, days)
        return utilization(
            self.reservation_repo.list_intervals(hall_id),
            hall_id,
            window_start,
            window_end,
        )

    def list_reservations(
        self,
        on_date: date | None = None,
        company: str | None = None,
        hall_id: int | None = None,
        sort_by: SortField | None = None,
        order: SortOrder = SortOrder.ASC,
    ) -> list[Reservation]:
        return self.reservation_repo.search(
            on_date=on_date, company=company, hall_id=hall_id, sort_by=sort_by, order=order
        )

    def categorized(self) -> CategorizedReservations:
        return categorize(self.reservation_repo.list_all(), self.clock())

    def summary(self) -> ReservationSummary:
        return summarize(self.reservation_repo.list_all(), self.clock())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _price(self, hall: Hall, start: datetime, end: datetime) -> float:
        return price(
            start,
            end,
            hall.cost_per_day,
            long_stay_discount=self.settings.long_stay_discount,
        )

    def _ensure_bookable(self, hall: Hall, start: datetime, end: datetime) -> None:
        if not hall.available:
            raise ValidationError("Hall is not available for booking")
        if not hall.accepts(start, end):
            raise ValidationError(
                "Requested dates are outside the hall's availability window"
            )

    def _suggestions(
        self,
        hall: Hall,
        start: datetime,
        end: datetime,
        booked: list[Reservation],
    ) -> list[DateRange]:
        window = timedelta(days=self.settings.suggestion_window_days)
        not_before = _next_midnight(self.clock())
        if hall.available_from is not None:
            not_before = max(not_before, hall.available_from)
        return list(
            suggest(
                booked,
                start,
                end,
                search_before=window,
                search_after=window,
                not_before=not_before,
                not_after=hall.available_to,
            )
        )

    def _conflict(
        self,
        hall: Hall,
        start: datetime,
        end: datetime,
        booked: list[Reservation],
        conflicting_ids: list[int],
        message: str = "Hall is already booked for these dates",
    ) -> ConflictError:
        suggestions = self._suggestions(hall, start, end, booked)
        self.bus.publish(
            ConflictDetected(
                hall_id=hall.id,
                start_date=start,
                end_date=end,
                conflicting_reservation_ids=conflicting_ids,
                suggestion_count=len(suggestions),
            )
        )
        return ConflictError(
            message, conflicting_ids=conflicting_ids, suggestions=suggestions
        )
