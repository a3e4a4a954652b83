"""Domain models for the hall reservation system."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, model_validator


class SortField(StrEnum):
    START_DATE = "start_date"
    END_DATE = "end_date"
    COMPANY = "company"
    HALL_ID = "hall_id"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def _check_availability_window(
    available_from: datetime | None, available_to: datetime | None
) -> None:
    if available_from is not None and available_to is not None:
        if available_from >= available_to:
            raise ValueError("available_from must be before available_to")


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class Hall(BaseModel):
    id: int = 0
    location: str
    capacity: int
    cost_per_day: float
    available: bool = True
    available_from: UtcDatetime | None = None
    available_to: UtcDatetime | None = None

    @model_validator(mode="after")
    def _window_ordered(self) -> Hall:
        _check_availability_window(self.available_from, self.available_to)
        return self

    def accepts(self, start: datetime, end: datetime) -> bool:
        """True if ``[start, end)`` lies inside the availability window."""
        if self.available_from is not None and start < self.available_from:
            return False
        if self.available_to is not None and end > self.available_to:
            return False
        return True


class Reservation(BaseModel):
    id: int = 0
    hall_id: int
    name: str
    company: str = ""
    start_date: UtcDatetime
    end_date: UtcDatetime
    total_cost: float = 0.0
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _end_after_start(self) -> Reservation:
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class Requester(BaseModel):
    name: str
    company: str = ""


class DateRange(BaseModel):
    start: datetime
    end: datetime


class UtilizationReport(BaseModel):
    hall_id: int
    period_start: date
    period_end: date
    total_days: int
    booked_days: int
    utilization_rate: float


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class HallCreate(BaseModel):
    location: str = Field(min_length=1, max_length=255)
    capacity: int = Field(gt=0)
    cost_per_day: float = Field(gt=0)
    available: bool = True
    available_from: UtcDatetime | None = None
    available_to: UtcDatetime | None = None

    @model_validator(mode="after")
    def _window_ordered(self) -> HallCreate:
        _check_availability_window(self.available_from, self.available_to)
        return self


class HallUpdate(BaseModel):
    location: str | None = Field(default=None, min_length=1, max_length=255)
    capacity: int | None = Field(default=None, gt=0)
    cost_per_day: float | None = Field(default=None, gt=0)
    available: bool | None = None
    available_from: UtcDatetime | None = None
    available_to: UtcDatetime | None = None


class ReservationCreate(BaseModel):
    hall_id: int
    name: str = Field(min_length=1, max_length=255)
    company: str = Field(default="", max_length=255)
    start_date: UtcDatetime
    end_date: UtcDatetime


class ReservationUpdate(BaseModel):
    hall_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    start_date: UtcDatetime
    end_date: UtcDatetime


class BookingDetails(BaseModel):
    duration_days: int
    cost_per_day: float


class BookingResponse(BaseModel):
    reservation: Reservation
    details: BookingDetails


class ConflictResponse(BaseModel):
    error: str
    suggestions: list[DateRange] = Field(default_factory=list)


class ReservationSummary(BaseModel):
    total_reservations: int = 0
    past_reservations: int = 0
    current_reservations: int = 0
    upcoming_reservations: int = 0
    total_revenue: float = 0.0


class CategorizedReservations(BaseModel):
    past: list[Reservation] = Field(default_factory=list)
    current: list[Reservation] = Field(default_factory=list)
    upcoming: list[Reservation] = Field(default_factory=list)
