"""Unit тести для LeaveRequestService."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from backend.models.leave_request import LeaveRequest
from backend.models.notification import NotificationLog
from backend.schemas.leave import RolRequestCreate, SickLeaveRequestCreate, VacationRequestCreate
from backend.services.leave_balance_service import LeaveBalanceService
from backend.services.leave_request_service import (
    LeaveRequestService,
    compute_hours_requested,
    days_inclusive,
    validate_payload,
)
from backend.services.notification_service import NotificationService
from shared.enums import LeaveRequestStatus, LeaveRequestType, NotificationType
from shared.exceptions import (
    InsufficientBalanceError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    StoreUnavailableError,
    ValidationError,
)


@pytest.fixture
def service(db_session):
    """Сервіс з нестрогою перевіркою балансу."""
    return LeaveRequestService(db_session, strict_balance_check=False, hours_per_day=8)


@pytest.fixture
def strict_service(db_session):
    """Сервіс, що вважає відсутній баланс нульовим."""
    return LeaveRequestService(db_session, strict_balance_check=True, hours_per_day=8)


def set_balance(db, worker, vacation, rol):
    return LeaveBalanceService(db).set_balance(worker.id, vacation, rol)


def current_balance(db, worker):
    db.expire_all()
    return LeaveBalanceService(db).get_balance(worker.id)


def vacation(start, end, reason=None):
    return VacationRequestCreate(start_date=start, end_date=end, reason=reason)


class TestHoursComputation:
    """Тести розрахунку годин запиту."""

    def test_days_inclusive_single_day(self):
        assert days_inclusive(date(2026, 3, 2), date(2026, 3, 2)) == 1

    def test_days_inclusive_crosses_month(self):
        assert days_inclusive(date(2026, 1, 30), date(2026, 2, 2)) == 4

    def test_vacation_hours_are_days_times_eight(self):
        payload = vacation(date(2026, 3, 2), date(2026, 3, 3))
        assert compute_hours_requested(payload) == Decimal("16")

    def test_sick_leave_hours_are_days_times_eight(self):
        payload = SickLeaveRequestCreate(
            start_date=date(2026, 3, 2),
            end_date=date(2026, 3, 6),
            certificate_url="certificates/1.pdf",
        )
        assert compute_hours_requested(payload) == Decimal("40")

    def test_rol_hours_use_supplied_value(self):
        payload = RolRequestCreate(hours=Decimal("3"), reason="dentista")
        assert compute_hours_requested(payload) == Decimal("3")

    def test_custom_hours_per_day(self):
        payload = vacation(date(2026, 3, 2), date(2026, 3, 3))
        assert compute_hours_requested(payload, hours_per_day=6) == Decimal("12")


class TestPayloadValidation:
    """Тести обов'язкових полів для кожного типу запиту."""

    def test_vacation_without_dates(self):
        with pytest.raises(ValidationError, match="start and end dates required"):
            validate_payload(VacationRequestCreate(start_date=date(2026, 3, 2)))

    def test_vacation_end_before_start(self):
        with pytest.raises(ValidationError, match="end date must not be before start date"):
            validate_payload(vacation(date(2026, 3, 5), date(2026, 3, 2)))

    def test_sick_leave_without_certificate(self):
        payload = SickLeaveRequestCreate(start_date=date(2026, 3, 2), end_date=date(2026, 3, 3))
        with pytest.raises(ValidationError, match="certificate required"):
            validate_payload(payload)

    def test_sick_leave_blank_certificate(self):
        payload = SickLeaveRequestCreate(
            start_date=date(2026, 3, 2),
            end_date=date(2026, 3, 3),
            certificate_url="   ",
        )
        with pytest.raises(ValidationError, match="certificate required"):
            validate_payload(payload)

    def test_rol_without_hours(self):
        with pytest.raises(ValidationError, match="hours required"):
            validate_payload(RolRequestCreate(reason="visita"))

    def test_rol_zero_hours(self):
        # model_construct обходить обмеження схеми, як це робить внутрішній виклик сервісу
        payload = RolRequestCreate.model_construct(request_type="rol", hours=Decimal("0"), reason="visita")
        with pytest.raises(ValidationError, match="greater than zero"):
            validate_payload(payload)

    def test_rol_blank_reason(self):
        with pytest.raises(ValidationError, match="reason required"):
            validate_payload(RolRequestCreate(hours=Decimal("2"), reason="  "))

    def test_single_day_vacation_is_valid(self):
        validate_payload(vacation(date(2026, 3, 2), date(2026, 3, 2)))


class TestSubmitRequest:
    """Тести подання запиту."""

    def test_vacation_submitted_as_pending_without_debit(self, db_session, service, worker):
        """Сценарій: баланс 40 год, відпустка на 2 дні -> 16 год, баланс не змінюється."""
        set_balance(db_session, worker, 40, 8)

        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        assert request.id is not None
        assert request.status == LeaveRequestStatus.PENDING
        assert request.request_type == LeaveRequestType.VACATION
        assert request.hours_requested == Decimal("16")
        assert request.organization_id == worker.organization_id
        assert current_balance(db_session, worker).vacation_hours == Decimal("40")

    def test_rol_over_balance_rejected_and_not_persisted(self, db_session, service, worker):
        """Сценарій: ROL 4 год на балансі, запит на 8 год -> помилка, запис не створено."""
        set_balance(db_session, worker, 40, 4)

        with pytest.raises(InsufficientBalanceError) as exc_info:
            service.submit_request(worker, RolRequestCreate(hours=Decimal("8"), reason="dentist"))

        assert exc_info.value.requested == Decimal("8")
        assert exc_info.value.available == Decimal("4")
        assert db_session.query(LeaveRequest).count() == 0

    def test_request_equal_to_balance_is_allowed(self, db_session, service, worker):
        set_balance(db_session, worker, 16, 0)

        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        assert request.hours_requested == Decimal("16")

    def test_sick_leave_is_not_balance_checked(self, db_session, service, worker):
        set_balance(db_session, worker, 0, 0)
        payload = SickLeaveRequestCreate(
            start_date=date(2026, 3, 2),
            end_date=date(2026, 3, 11),
            certificate_url="certificates/2_20260302.pdf",
        )

        request = service.submit_request(worker, payload)

        assert request.hours_requested == Decimal("80")
        assert request.certificate_url == "certificates/2_20260302.pdf"

    def test_sick_leave_without_certificate_creates_nothing(self, db_session, service, worker):
        payload = SickLeaveRequestCreate(start_date=date(2026, 3, 2), end_date=date(2026, 3, 3))

        with pytest.raises(ValidationError, match="certificate required"):
            service.submit_request(worker, payload)

        assert db_session.query(LeaveRequest).count() == 0

    def test_missing_balance_skips_check(self, db_session, service, worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 13)))

        assert request.hours_requested == Decimal("96")
        assert request.status == LeaveRequestStatus.PENDING

    def test_missing_balance_in_strict_mode_counts_as_zero(self, db_session, strict_service, worker):
        with pytest.raises(InsufficientBalanceError):
            strict_service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 2)))

    def test_reason_is_trimmed(self, db_session, service, worker):
        set_balance(db_session, worker, 40, 8)

        request = service.submit_request(worker, RolRequestCreate(hours=Decimal("2"), reason="  visita medica "))

        assert request.reason == "visita medica"
        assert request.start_date is None

    def test_admins_are_notified(self, db_session, service, admin, worker):
        set_balance(db_session, worker, 40, 8)

        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        notification = db_session.query(NotificationLog).filter(NotificationLog.user_id == admin.id).one()
        assert notification.notification_type == NotificationType.LEAVE_REQUEST
        assert notification.title == "Nuova Richiesta Permesso"
        assert notification.body == "Mario Verdi ha richiesto un permesso"
        assert notification.entity_id == request.id


class TestReviewRequest:
    """Тести погодження та відхилення запиту."""

    def test_approve_debits_vacation(self, db_session, service, admin, worker):
        """Сценарій: погодження 16 год при балансі 40 -> 24."""
        set_balance(db_session, worker, 40, 8)
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        reviewed = service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)

        assert reviewed.status == LeaveRequestStatus.APPROVED
        assert reviewed.reviewed_by == admin.id
        assert reviewed.reviewed_at is not None
        balance = current_balance(db_session, worker)
        assert balance.vacation_hours == Decimal("24")
        assert balance.rol_hours == Decimal("8")

    def test_approve_debits_rol(self, db_session, service, admin, worker):
        set_balance(db_session, worker, 40, 8)
        request = service.submit_request(worker, RolRequestCreate(hours=Decimal("3"), reason="dentista"))

        service.review_request(request.id, "approved", admin)

        assert current_balance(db_session, worker).rol_hours == Decimal("5")

    def test_reject_leaves_balance_untouched(self, db_session, service, admin, worker):
        set_balance(db_session, worker, 40, 8)
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        reviewed = service.review_request(request.id, LeaveRequestStatus.REJECTED, admin)

        assert reviewed.status == LeaveRequestStatus.REJECTED
        assert current_balance(db_session, worker).vacation_hours == Decimal("40")

    def test_approve_sick_leave_does_not_debit(self, db_session, service, admin, worker):
        set_balance(db_session, worker, 40, 8)
        payload = SickLeaveRequestCreate(
            start_date=date(2026, 3, 2),
            end_date=date(2026, 3, 3),
            certificate_url="certificates/x.pdf",
        )
        request = service.submit_request(worker, payload)

        service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)

        balance = current_balance(db_session, worker)
        assert balance.vacation_hours == Decimal("40")
        assert balance.rol_hours == Decimal("8")

    def test_second_review_fails(self, db_session, service, admin, worker):
        """Сценарій: повторний розгляд вже погодженого запиту."""
        set_balance(db_session, worker, 40, 8)
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))
        first = service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)
        reviewed_at = first.reviewed_at

        with pytest.raises(InvalidStateError):
            service.review_request(request.id, LeaveRequestStatus.REJECTED, admin)

        db_session.expire_all()
        stored = db_session.get(LeaveRequest, request.id)
        assert stored.status == LeaveRequestStatus.APPROVED
        assert stored.reviewed_at == reviewed_at
        assert current_balance(db_session, worker).vacation_hours == Decimal("24")

    def test_failed_debit_rolls_back_status(self, db_session, service, admin, worker):
        set_balance(db_session, worker, 16, 0)
        first = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))
        second = service.submit_request(worker, vacation(date(2026, 4, 2), date(2026, 4, 3)))
        service.review_request(first.id, LeaveRequestStatus.APPROVED, admin)

        with pytest.raises(InsufficientBalanceError):
            service.review_request(second.id, LeaveRequestStatus.APPROVED, admin)

        db_session.expire_all()
        stored = db_session.get(LeaveRequest, second.id)
        assert stored.status == LeaveRequestStatus.PENDING
        assert stored.reviewed_by is None
        assert current_balance(db_session, worker).vacation_hours == Decimal("0")

    def test_approve_without_balance_skips_debit(self, db_session, service, admin, worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        reviewed = service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)

        assert reviewed.status == LeaveRequestStatus.APPROVED
        assert current_balance(db_session, worker) is None

    def test_strict_approve_without_balance_fails(self, db_session, service, strict_service, admin, worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        with pytest.raises(InsufficientBalanceError):
            strict_service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)

        db_session.expire_all()
        assert db_session.get(LeaveRequest, request.id).status == LeaveRequestStatus.PENDING

    def test_worker_cannot_review(self, db_session, service, admin, worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        with pytest.raises(PermissionDeniedError):
            service.review_request(request.id, LeaveRequestStatus.APPROVED, worker)

    def test_admin_of_other_organization_cannot_review(self, db_session, service, worker, other_admin):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        with pytest.raises(PermissionDeniedError):
            service.review_request(request.id, LeaveRequestStatus.APPROVED, other_admin)

    def test_missing_request(self, service, admin):
        with pytest.raises(NotFoundError):
            service.review_request(9999, LeaveRequestStatus.APPROVED, admin)

    @pytest.mark.parametrize("decision", ["pending", "cancelled"])
    def test_invalid_decision(self, service, admin, decision):
        with pytest.raises(ValidationError):
            service.review_request(1, decision, admin)

    def test_worker_is_notified_of_approval(self, db_session, service, admin, worker):
        set_balance(db_session, worker, 40, 8)
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)

        notification = db_session.query(NotificationLog).filter(NotificationLog.user_id == worker.id).one()
        assert notification.notification_type == NotificationType.LEAVE_RESPONSE
        assert notification.title == "Richiesta Permesso Approvata"
        assert notification.body == "La tua richiesta di permesso è stata approvata"

    def test_worker_is_notified_of_rejection(self, db_session, service, admin, worker):
        request = service.submit_request(worker, RolRequestCreate(hours=Decimal("2"), reason="visita"))

        service.review_request(request.id, LeaveRequestStatus.REJECTED, admin)

        notification = db_session.query(NotificationLog).filter(NotificationLog.user_id == worker.id).one()
        assert notification.title == "Richiesta Permesso Rifiutata"

    def test_notification_failure_does_not_undo_approval(
        self, db_session, session_factory, monkeypatch, admin, worker
    ):
        set_balance(db_session, worker, 40, 8)
        broken_session = session_factory()

        def failing_commit():
            raise OperationalError("INSERT INTO notification_logs", {}, Exception("database is locked"))

        monkeypatch.setattr(broken_session, "commit", failing_commit)
        service = LeaveRequestService(
            db_session,
            notifications=NotificationService(broken_session),
            strict_balance_check=False,
        )
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        reviewed = service.review_request(request.id, LeaveRequestStatus.APPROVED, admin)

        assert reviewed.status == LeaveRequestStatus.APPROVED
        assert current_balance(db_session, worker).vacation_hours == Decimal("24")
        assert db_session.query(NotificationLog).count() == 0
        broken_session.close()

    def test_admin_lookup_failure_does_not_fail_submission(self, db_session, service, monkeypatch, worker):
        def failing_admin_ids(self, organization_id):
            raise OperationalError("SELECT profiles.id", {}, Exception("database is locked"))

        monkeypatch.setattr(NotificationService, "admin_ids", failing_admin_ids)

        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        assert request.status == LeaveRequestStatus.PENDING
        assert db_session.query(LeaveRequest).count() == 1
        assert db_session.query(NotificationLog).count() == 0


class TestQueries:
    """Тести читання запитів."""

    def test_get_request_visible_to_owner_and_admin(self, db_session, service, admin, worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        assert service.get_request(request.id, worker).id == request.id
        assert service.get_request(request.id, admin).id == request.id

    def test_get_request_hidden_from_other_worker(self, db_session, service, worker, second_worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        with pytest.raises(NotFoundError):
            service.get_request(request.id, second_worker)

    def test_list_for_organization_filters_by_status(self, db_session, service, admin, worker, second_worker):
        first = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))
        second = service.submit_request(second_worker, vacation(date(2026, 3, 9), date(2026, 3, 9)))
        service.review_request(first.id, LeaveRequestStatus.REJECTED, admin)

        pending = service.list_for_organization(admin.organization_id, LeaveRequestStatus.PENDING)
        everything = service.list_for_organization(admin.organization_id)

        assert [r.id for r in pending] == [second.id]
        assert {r.id for r in everything} == {first.id, second.id}

    def test_list_for_worker_only_own(self, db_session, service, worker, second_worker):
        own = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))
        service.submit_request(second_worker, vacation(date(2026, 3, 9), date(2026, 3, 9)))

        assert [r.id for r in service.list_for_worker(worker.id)] == [own.id]

    def test_get_request_store_unavailable(self, db_session, service, monkeypatch, worker):
        request = service.submit_request(worker, vacation(date(2026, 3, 2), date(2026, 3, 3)))

        def failing_get(*args, **kwargs):
            raise OperationalError("SELECT leave_requests", {}, Exception("unable to open database file"))

        monkeypatch.setattr(db_session, "get", failing_get)

        with pytest.raises(StoreUnavailableError):
            service.get_request(request.id, worker)
