"""Pydantic схеми для календаря доступності."""

from datetime import date

from pydantic import BaseModel

from shared.enums import LeaveRequestType


class AvailabilityEntryResponse(BaseModel):
    """Доступність одного працівника на дату."""

    worker_id: int
    worker_name: str
    is_available: bool
    reason: str | None = None
    leave_type: LeaveRequestType | None = None
    end_date: date | None = None


class AvailabilityResponse(BaseModel):
    """Доступність всіх працівників організації на дату."""

    on_date: date
    available_count: int
    unavailable_count: int
    entries: list[AvailabilityEntryResponse]


class CalendarDayResponse(BaseModel):
    """Один день календаря з працівниками у відсутності."""

    day: date
    workers_on_leave: list[int]


class CalendarResponse(BaseModel):
    """Місячний календар відсутностей."""

    year: int
    month: int
    days: list[CalendarDayResponse]


class InLeaveResponse(BaseModel):
    """Чи перебуває працівник у відсутності на дату."""

    worker_id: int
    on_date: date
    in_leave: bool
