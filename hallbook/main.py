"""FastAPI application: entry point for the hall reservation service."""

from __future__ import annotations

import logging
from datetime import date, datetime

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from hallbook.config import Settings
from hallbook.domain.bus import EventBus
from hallbook.domain.errors import ConflictError, HallbookError
from hallbook.domain.handlers import HandlerRegistry
from hallbook.domain.models import (
    BookingResponse,
    CategorizedReservations,
    ConflictResponse,
    DateRange,
    Hall,
    HallCreate,
    HallUpdate,
    Requester,
    Reservation,
    ReservationCreate,
    ReservationSummary,
    ReservationUpdate,
    SortField,
    SortOrder,
    UtilizationReport,
)
from hallbook.repos.memory import HallRepository, ReservationRepository
from hallbook.services.booking import BookingService, booking_details
from hallbook.services.halls import HallService

settings = Settings.from_env()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Hall Reservation Service")

# ── Singletons (created at import time for simplicity) ────────────────
event_bus = EventBus()
hall_repo = HallRepository(enabled=settings.persistence_enabled)
reservation_repo = ReservationRepository(enabled=settings.persistence_enabled)

handler_registry = HandlerRegistry(
    bus=event_bus,
    reservation_repo=reservation_repo,
    settings=settings,
)
booking_service = BookingService(
    hall_repo=hall_repo,
    reservation_repo=reservation_repo,
    bus=event_bus,
    settings=settings,
)
hall_service = HallService(hall_repo=hall_repo, reservation_repo=reservation_repo)


# ── Error translation ─────────────────────────────────────────────────


@app.exception_handler(HallbookError)
def handle_domain_error(request: Request, exc: HallbookError) -> JSONResponse:
    if isinstance(exc, ConflictError):
        body = ConflictResponse(error=exc.message, suggestions=exc.suggestions)
        content = body.model_dump(mode="json")
    else:
        content = {"error": exc.message}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


# ── Halls ─────────────────────────────────────────────────────────────


@app.post("/halls", response_model=Hall)
def create_hall(payload: HallCreate) -> Hall:
    return hall_service.create(payload)


@app.get("/halls", response_model=list[Hall])
def list_halls() -> list[Hall]:
    return hall_service.list_all()


@app.get("/halls/{hall_id}", response_model=Hall)
def get_hall(hall_id: int) -> Hall:
    return hall_service.get(hall_id)


@app.put("/halls/{hall_id}", response_model=Hall)
def update_hall(hall_id: int, payload: HallUpdate) -> Hall:
    return hall_service.update(hall_id, payload)


@app.delete("/halls/{hall_id}")
def delete_hall(hall_id: int) -> dict:
    hall_service.delete(hall_id)
    return {"message": "Hall deleted successfully"}


@app.get("/halls/{hall_id}/utilization", response_model=UtilizationReport)
def get_hall_utilization(
    hall_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
) -> UtilizationReport:
    """Share of days booked; defaults to the trailing 30 days ending today."""
    return booking_service.get_utilization(hall_id, start_date, end_date)


@app.get("/halls/{hall_id}/suggestions", response_model=list[DateRange])
def get_hall_suggestions(
    hall_id: int, start_date: datetime, end_date: datetime
) -> list[DateRange]:
    """Free ranges near the requested one, same length, earliest first."""
    return booking_service.suggest_dates(hall_id, start_date, end_date)


# ── Reservations ──────────────────────────────────────────────────────


@app.post(
    "/reservations",
    response_model=BookingResponse,
    responses={409: {"model": ConflictResponse}},
)
def create_reservation(payload: ReservationCreate) -> BookingResponse:
    reservation = booking_service.submit_booking(
        payload.hall_id,
        payload.start_date,
        payload.end_date,
        Requester(name=payload.name, company=payload.company),
    )
    return BookingResponse(reservation=reservation, details=booking_details(reservation))


@app.get("/reservations", response_model=list[Reservation])
def list_reservations(
    on_date: date | None = Query(default=None, alias="date"),
    company: str | None = None,
    hall: int | None = None,
    sort_by: SortField | None = None,
    order: SortOrder = SortOrder.ASC,
) -> list[Reservation]:
    return booking_service.list_reservations(
        on_date=on_date, company=company, hall_id=hall, sort_by=sort_by, order=order
    )


@app.get("/reservations/categorized", response_model=CategorizedReservations)
def categorized_reservations() -> CategorizedReservations:
    return booking_service.categorized()


@app.get("/reservations/summary", response_model=ReservationSummary)
def reservation_summary() -> ReservationSummary:
    return booking_service.summary()


@app.get("/reservations/{reservation_id}", response_model=Reservation)
def get_reservation(reservation_id: int) -> Reservation:
    return reservation_repo.get(reservation_id)


@app.put(
    "/reservations/{reservation_id}",
    response_model=Reservation,
    responses={409: {"model": ConflictResponse}},
)
def update_reservation(reservation_id: int, payload: ReservationUpdate) -> Reservation:
    requester = None
    if payload.name is not None or payload.company is not None:
        current = reservation_repo.get(reservation_id)
        requester = Requester(
            name=payload.name if payload.name is not None else current.name,
            company=payload.company if payload.company is not None else current.company,
        )
    return booking_service.modify_booking(
        reservation_id,
        payload.start_date,
        payload.end_date,
        hall_id=payload.hall_id,
        requester=requester,
    )


@app.delete("/reservations/{reservation_id}")
def delete_reservation(reservation_id: int) -> dict:
    booking_service.cancel_booking(reservation_id)
    return {"message": "Reservation and receipt deleted successfully"}
