"""Сервіс запитів на відсутність (відпустка, ROL, лікарняний)."""

from datetime import date, datetime
from decimal import Decimal

import structlog
from sqlalchemy import update
from sqlalchemy.orm import Session

from backend.core.config import get_settings
from backend.core.database import store_errors
from backend.models.leave_request import LeaveRequest
from backend.models.profile import Profile
from backend.schemas.leave import (
    LeaveRequestPayload,
    RolRequestCreate,
    SickLeaveRequestCreate,
    VacationRequestCreate,
)
from backend.services.audit_service import AuditService
from backend.services.leave_balance_service import LeaveBalanceService
from backend.services.notification_service import NotificationService
from shared.constants import HOURS_PER_DAY, ZERO_HOURS
from shared.enums import AuditAction, LeaveRequestStatus, LeaveRequestType
from shared.exceptions import (
    InsufficientBalanceError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

REVIEW_DECISIONS = (LeaveRequestStatus.APPROVED, LeaveRequestStatus.REJECTED)


def days_inclusive(start: date, end: date) -> int:
    """
    Кількість календарних днів у діапазоні, обидві межі включно.

    Examples:
        days_inclusive(date(2026, 3, 2), date(2026, 3, 2)) == 1
        days_inclusive(date(2026, 3, 2), date(2026, 3, 3)) == 2
    """
    return (end - start).days + 1


def compute_hours_requested(payload: LeaveRequestPayload, hours_per_day: int = HOURS_PER_DAY) -> Decimal:
    """
    Обчислює кількість годин запиту.

    Для відпустки та лікарняного - дні діапазону помножені на hours_per_day,
    для ROL - значення, вказане працівником.
    """
    if isinstance(payload, RolRequestCreate):
        return Decimal(str(payload.hours))
    return Decimal(days_inclusive(payload.start_date, payload.end_date) * hours_per_day)


def validate_payload(payload: LeaveRequestPayload) -> None:
    """
    Перевіряє обов'язкові поля для кожного типу запиту.

    Raises:
        ValidationError: Якщо поле відсутнє або діапазон дат некоректний
    """
    if isinstance(payload, (VacationRequestCreate, SickLeaveRequestCreate)):
        if payload.start_date is None or payload.end_date is None:
            raise ValidationError("start and end dates required")
        if payload.end_date < payload.start_date:
            raise ValidationError("end date must not be before start date")
        if isinstance(payload, SickLeaveRequestCreate) and not (payload.certificate_url or "").strip():
            raise ValidationError("certificate required")
    elif isinstance(payload, RolRequestCreate):
        if payload.hours is None:
            raise ValidationError("hours required")
        if payload.hours <= 0:
            raise ValidationError("hours must be greater than zero")
        if not (payload.reason or "").strip():
            raise ValidationError("reason required")
    else:
        raise ValidationError(f"Unknown leave request type: {type(payload).__name__}")


class LeaveRequestService:
    """
    Сервіс подання та розгляду запитів на відсутність.

    Подання перевіряє залишок, але нічого не списує. Списання відбувається
    при погодженні, в одній транзакції зі зміною статусу.
    """

    def __init__(
        self,
        db: Session,
        notifications: NotificationService | None = None,
        strict_balance_check: bool | None = None,
        hours_per_day: int | None = None,
    ):
        """
        Ініціалізує сервіс.

        Args:
            db: Сесія бази даних
            notifications: Сервіс сповіщень (за замовчуванням - на тій же сесії)
            strict_balance_check: Вважати відсутній баланс нульовим
            hours_per_day: Годин в одному дні відпустки
        """
        settings = get_settings()
        self.db = db
        self.notifications = notifications or NotificationService(db)
        self.strict_balance_check = (
            settings.strict_balance_check if strict_balance_check is None else strict_balance_check
        )
        self.hours_per_day = hours_per_day or settings.hours_per_day

    def submit_request(self, worker: Profile, payload: LeaveRequestPayload) -> LeaveRequest:
        """
        Створює запит у статусі pending.

        Args:
            worker: Працівник, що подає запит
            payload: Дані запиту одного з трьох типів

        Returns:
            Створений LeaveRequest

        Raises:
            ValidationError: Якщо бракує обов'язкових полів
            InsufficientBalanceError: Якщо годин більше, ніж залишок
        """
        validate_payload(payload)
        request_type = LeaveRequestType(payload.request_type)
        hours = compute_hours_requested(payload, self.hours_per_day)

        self._check_balance(worker.id, request_type, hours)

        request = LeaveRequest(
            worker_id=worker.id,
            organization_id=worker.organization_id,
            request_type=request_type,
            hours_requested=hours,
            reason=(payload.reason or "").strip() or None,
            status=LeaveRequestStatus.PENDING,
        )
        if isinstance(payload, (VacationRequestCreate, SickLeaveRequestCreate)):
            request.start_date = payload.start_date
            request.end_date = payload.end_date
        if isinstance(payload, SickLeaveRequestCreate):
            request.certificate_url = payload.certificate_url

        with store_errors(self.db):
            self.db.add(request)
            self.db.commit()
            self.db.refresh(request)

        logger.info(
            "leave_request_submitted",
            request_id=request.id,
            worker_id=worker.id,
            request_type=request_type.value,
            hours=str(hours),
        )

        self.notifications.notify_leave_request(
            worker.full_name,
            request.id,
            worker.organization_id,
        )
        return request

    def review_request(
        self,
        request_id: int,
        decision: LeaveRequestStatus | str,
        reviewer: Profile,
    ) -> LeaveRequest:
        """
        Погоджує або відхиляє запит.

        Зміна статусу - умовний UPDATE (WHERE status = 'pending'), тому лише
        один розгляд може завершитись успішно. При погодженні в тій же
        транзакції списуються години відпустки або ROL.

        Args:
            request_id: ID запиту
            decision: approved або rejected
            reviewer: Адміністратор, що розглядає запит

        Returns:
            Оновлений LeaveRequest

        Raises:
            ValidationError: Якщо рішення не approved/rejected
            NotFoundError: Якщо запиту не існує
            PermissionDeniedError: Якщо reviewer не адміністратор організації
            InvalidStateError: Якщо запит вже розглянуто
            InsufficientBalanceError: Якщо при погодженні не вистачає годин
        """
        try:
            decision = LeaveRequestStatus(decision)
        except ValueError as e:
            raise ValidationError(f"Invalid decision: {decision}") from e
        if decision not in REVIEW_DECISIONS:
            raise ValidationError(f"Invalid decision: {decision.value}")

        with store_errors(self.db):
            request = self.db.get(LeaveRequest, request_id)
            if request is None:
                raise NotFoundError(f"Leave request {request_id} not found")
            if not reviewer.is_admin or reviewer.organization_id != request.organization_id:
                raise PermissionDeniedError("Only organization admins can review leave requests")
            if not request.is_pending:
                raise InvalidStateError(f"Leave request {request_id} is already {request.status.value}")

            try:
                result = self.db.execute(
                    update(LeaveRequest)
                    .where(
                        LeaveRequest.id == request_id,
                        LeaveRequest.status == LeaveRequestStatus.PENDING,
                    )
                    .values(
                        status=decision,
                        reviewed_by=reviewer.id,
                        reviewed_at=datetime.now(),
                    )
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise InvalidStateError(f"Leave request {request_id} was reviewed concurrently")

                if decision == LeaveRequestStatus.APPROVED:
                    self._debit(request)

                AuditService(self.db, user_id=reviewer.id).record(
                    AuditAction.APPROVE if decision == LeaveRequestStatus.APPROVED else AuditAction.REJECT,
                    LeaveRequest.__tablename__,
                    request.id,
                    old_data={"status": LeaveRequestStatus.PENDING},
                    new_data={"status": decision, "reviewed_by": reviewer.id},
                )
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

            self.db.refresh(request)

        logger.info(
            "leave_request_reviewed",
            request_id=request.id,
            decision=decision.value,
            reviewer_id=reviewer.id,
        )

        self.notifications.notify_leave_response(
            request.worker_id,
            decision.value,
            request.id,
            request.organization_id,
        )
        return request

    def get_request(self, request_id: int, viewer: Profile) -> LeaveRequest:
        """
        Повертає запит, видимий користувачу.

        Працівник бачить свої запити, адміністратор - всі запити організації.

        Raises:
            NotFoundError: Якщо запиту немає або він недоступний користувачу
        """
        with store_errors(self.db):
            request = self.db.get(LeaveRequest, request_id)
        if request is None:
            raise NotFoundError(f"Leave request {request_id} not found")
        is_owner = request.worker_id == viewer.id
        is_org_admin = viewer.is_admin and viewer.organization_id == request.organization_id
        if not (is_owner or is_org_admin):
            raise NotFoundError(f"Leave request {request_id} not found")
        return request

    def list_for_worker(self, worker_id: int) -> list[LeaveRequest]:
        """Запити працівника, новіші першими."""
        with store_errors():
            return (
                self.db.query(LeaveRequest)
                .filter(LeaveRequest.worker_id == worker_id)
                .order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
                .all()
            )

    def list_for_organization(
        self,
        organization_id: int | None,
        status: LeaveRequestStatus | None = None,
    ) -> list[LeaveRequest]:
        """
        Запити організації з необов'язковим фільтром статусу, новіші першими.

        Args:
            organization_id: ID організації
            status: Статус для фільтрації (None - всі)
        """
        with store_errors():
            query = self.db.query(LeaveRequest).filter(LeaveRequest.organization_id == organization_id)
            if status is not None:
                query = query.filter(LeaveRequest.status == status)
            return query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()

    def _check_balance(self, worker_id: int, request_type: LeaveRequestType, hours: Decimal) -> None:
        """Перевіряє залишок для vacation/rol. Лікарняний не обмежений."""
        if request_type == LeaveRequestType.SICK_LEAVE:
            return

        balance = LeaveBalanceService(self.db).get_balance(worker_id)
        if balance is None:
            if not self.strict_balance_check:
                logger.warning("leave_balance_missing", worker_id=worker_id, request_type=request_type.value)
                return
            available = ZERO_HOURS
        else:
            available = balance.hours_for(request_type.value)

        if hours > available:
            raise InsufficientBalanceError(
                f"Insufficient {request_type.value} balance: requested {hours}h, available {available}h",
                requested=hours,
                available=available,
            )

    def _debit(self, request: LeaveRequest) -> None:
        """Списує години погодженого запиту в поточній транзакції."""
        if request.request_type == LeaveRequestType.SICK_LEAVE:
            return

        debited = LeaveBalanceService(self.db).debit(
            request.worker_id,
            request.request_type,
            request.hours_requested,
        )
        if debited:
            return

        if self.strict_balance_check and request.hours_requested > 0:
            raise InsufficientBalanceError(
                f"Insufficient {request.request_type.value} balance: "
                f"requested {request.hours_requested}h, available 0h",
                requested=request.hours_requested,
                available=ZERO_HOURS,
            )
        logger.warning(
            "leave_balance_missing_on_approval",
            request_id=request.id,
            worker_id=request.worker_id,
        )
