"""API маршрути для календаря доступності працівників."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query

from backend.api.dependencies import AvailabilitySvc
from backend.core.dependencies import CurrentUser
from backend.schemas.availability import (
    AvailabilityEntryResponse,
    AvailabilityResponse,
    CalendarDayResponse,
    CalendarResponse,
    InLeaveResponse,
)

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailabilityResponse)
async def get_availability(
    service: AvailabilitySvc,
    current_user: CurrentUser,
    on_date: date | None = None,
):
    """
    Доступність працівників організації на дату (за замовчуванням - сьогодні).

    Враховуються лише погоджені запити. Для відсутніх працівників
    повертається підпис на кшталт "Ferie - matrimonio" та дата завершення.
    """
    target = on_date or date.today()
    entries = service.availability_on(current_user.organization_id, target)
    items = [
        AvailabilityEntryResponse(
            worker_id=entry.worker.id,
            worker_name=entry.worker.full_name,
            is_available=entry.is_available,
            reason=entry.reason,
            leave_type=entry.leave_type,
            end_date=entry.end_date,
        )
        for entry in entries
    ]
    available = sum(1 for item in items if item.is_available)
    return AvailabilityResponse(
        on_date=target,
        available_count=available,
        unavailable_count=len(items) - available,
        entries=items,
    )


@router.get("/calendar", response_model=CalendarResponse)
async def get_calendar(
    year: Annotated[int, Query(ge=2000, le=2100)],
    month: Annotated[int, Query(ge=1, le=12)],
    service: AvailabilitySvc,
    current_user: CurrentUser,
):
    """Місячний календар: для кожного дня - ID працівників у відсутності."""
    days = service.month_calendar(current_user.organization_id, year, month)
    return CalendarResponse(
        year=year,
        month=month,
        days=[CalendarDayResponse(day=day, workers_on_leave=ids) for day, ids in sorted(days.items())],
    )


@router.get("/{worker_id}/in-leave", response_model=InLeaveResponse)
async def get_worker_in_leave(
    worker_id: int,
    service: AvailabilitySvc,
    current_user: CurrentUser,
    on_date: date | None = None,
):
    """Чи перебуває працівник у погодженій відсутності на дату."""
    target = on_date or date.today()
    in_leave = service.worker_in_leave(current_user.organization_id, worker_id, target)
    return InLeaveResponse(worker_id=worker_id, on_date=target, in_leave=in_leave)
