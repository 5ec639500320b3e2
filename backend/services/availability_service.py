"""Розрахунок доступності працівників на основі погоджених відсутностей.

Функції compute_availability та is_date_in_leave - чисті, без звернень до БД;
AvailabilityService лише завантажує дані для них.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Protocol

from sqlalchemy.orm import Session

from backend.core.database import store_errors
from backend.models.leave_request import LeaveRequest
from backend.models.profile import Profile
from shared.enums import LeaveRequestStatus, LeaveRequestType, UserRole, get_leave_type_label


class WorkerRef(Protocol):
    id: int
    full_name: str


class DateRange:
    """
    Клас для представлення діапазону дат.

    Attributes:
        start: Початкова дата
        end: Кінцева дата (включно)
    """

    def __init__(self, start: date, end: date):
        if start > end:
            raise ValueError("Start date must not be after end date")
        self.start = start
        self.end = end

    def overlaps(self, other: "DateRange") -> bool:
        """
        Перевіряє, чи перетинається цей діапазон з іншим.

        Args:
            other: Інший діапазон дат

        Returns:
            True якщо діапазони перетинаються
        """
        return not (self.end < other.start or self.start > other.end)

    def contains(self, d: date | datetime) -> bool:
        """
        Перевіряє, чи входить дата в діапазон (межі включно).

        Час доби відкидається перед порівнянням.
        """
        return self.start <= _as_date(d) <= self.end

    @property
    def days(self) -> int:
        """Кількість днів у діапазоні включно."""
        return (self.end - self.start).days + 1


@dataclass
class AvailabilityEntry:
    """
    Доступність працівника на дату (не зберігається в БД).

    Attributes:
        worker: Працівник
        is_available: Чи доступний
        reason: Підпис для відображення, напр. "Ferie - matrimonio"
        leave_type: Тип відсутності
        end_date: Останній день відсутності
    """

    worker: WorkerRef
    is_available: bool
    reason: str | None = None
    leave_type: LeaveRequestType | None = None
    end_date: date | None = None


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _leave_range(request: LeaveRequest) -> DateRange | None:
    # Лише погоджені запити з діапазоном дат впливають на доступність
    if request.status != LeaveRequestStatus.APPROVED:
        return None
    if request.start_date is None or request.end_date is None:
        return None
    if request.start_date > request.end_date:
        return None
    return DateRange(request.start_date, request.end_date)


def leave_label(request: LeaveRequest) -> str:
    """Підпис відсутності: назва типу та причина, якщо вказана."""
    label = get_leave_type_label(LeaveRequestType(request.request_type).value)
    if request.reason:
        return f"{label} - {request.reason}"
    return label


def find_active_leave(
    worker_id: int,
    requests: Iterable[LeaveRequest],
    on_date: date | datetime,
) -> LeaveRequest | None:
    """Перший погоджений запит працівника, діапазон якого містить дату."""
    for request in requests:
        if request.worker_id != worker_id:
            continue
        leave = _leave_range(request)
        if leave is not None and leave.contains(on_date):
            return request
    return None


def compute_availability(
    workers: Iterable[WorkerRef],
    approved_requests: Iterable[LeaveRequest] | None,
    on_date: date | datetime,
) -> list[AvailabilityEntry]:
    """
    Обчислює доступність кожного працівника на дату.

    Ніколи не падає: порожній або відсутній список запитів означає,
    що всі доступні.
    """
    requests = list(approved_requests or [])
    entries = []
    for worker in workers:
        active = find_active_leave(worker.id, requests, on_date)
        if active is None:
            entries.append(AvailabilityEntry(worker=worker, is_available=True))
            continue
        entries.append(
            AvailabilityEntry(
                worker=worker,
                is_available=False,
                reason=leave_label(active),
                leave_type=LeaveRequestType(active.request_type),
                end_date=active.end_date,
            )
        )
    return entries


def is_date_in_leave(
    worker_id: int,
    on_date: date | datetime,
    approved_requests: Iterable[LeaveRequest] | None,
) -> bool:
    """Чи перебуває працівник у погодженій відсутності на дату."""
    return find_active_leave(worker_id, approved_requests or [], on_date) is not None


def month_bounds(year: int, month: int) -> DateRange:
    """Перший та останній день місяця."""
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last_day))


class AvailabilityService:
    """Завантаження працівників та погоджених відсутностей для календаря."""

    # Ролі, що відображаються в календарі доступності
    CALENDAR_ROLES = [
        UserRole.WORKER,
        UserRole.SALES_MANAGER,
        UserRole.ADMINISTRATOR,
        UserRole.ORG_MANAGER,
        UserRole.ADMIN,
    ]

    def __init__(self, db: Session):
        self.db = db

    def load_workers(self, organization_id: int | None) -> list[Profile]:
        """Активні працівники організації, відсортовані за ім'ям."""
        with store_errors():
            return (
                self.db.query(Profile)
                .filter(
                    Profile.organization_id == organization_id,
                    Profile.role.in_(self.CALENDAR_ROLES),
                    Profile.is_active == True,
                )
                .order_by(Profile.full_name)
                .all()
            )

    def load_approved_requests(
        self,
        organization_id: int | None,
        period: DateRange,
        worker_id: int | None = None,
    ) -> list[LeaveRequest]:
        """
        Погоджені запити, що перетинаються з періодом.

        Args:
            organization_id: ID організації
            period: Період (зазвичай місяць)
            worker_id: Обмежити одним працівником
        """
        with store_errors():
            query = self.db.query(LeaveRequest).filter(
                LeaveRequest.organization_id == organization_id,
                LeaveRequest.status == LeaveRequestStatus.APPROVED,
                LeaveRequest.end_date >= period.start,
                LeaveRequest.start_date <= period.end,
            )
            if worker_id is not None:
                query = query.filter(LeaveRequest.worker_id == worker_id)
            return query.order_by(LeaveRequest.start_date, LeaveRequest.id).all()

    def availability_on(self, organization_id: int | None, on_date: date) -> list[AvailabilityEntry]:
        """Доступність всіх працівників організації на дату."""
        workers = self.load_workers(organization_id)
        requests = self.load_approved_requests(organization_id, DateRange(on_date, on_date))
        return compute_availability(workers, requests, on_date)

    def worker_in_leave(self, organization_id: int | None, worker_id: int, on_date: date) -> bool:
        """Чи перебуває працівник у відсутності на дату."""
        requests = self.load_approved_requests(organization_id, DateRange(on_date, on_date), worker_id)
        return is_date_in_leave(worker_id, on_date, requests)

    def month_calendar(self, organization_id: int | None, year: int, month: int) -> dict[date, list[int]]:
        """
        Для кожного дня місяця - ID працівників у відсутності.

        Returns:
            Словник дата -> відсортований список worker_id
        """
        period = month_bounds(year, month)
        requests = self.load_approved_requests(organization_id, period)
        worker_ids = sorted({r.worker_id for r in requests})

        days: dict[date, list[int]] = {}
        current = period.start
        while current <= period.end:
            days[current] = [w for w in worker_ids if is_date_in_leave(w, current, requests)]
            current += timedelta(days=1)
        return days
