"""Сервіс привілейованих операцій з працівниками."""

from typing import Any

import structlog
from sqlalchemy.orm import Session

from backend.core.database import store_errors
from backend.core.security import get_password_hash
from backend.models.leave_balance import LeaveBalance
from backend.models.leave_request import LeaveRequest
from backend.models.notification import NotificationLog
from backend.models.profile import Profile
from backend.services.audit_service import AuditService
from shared.enums import AuditAction, UserRole
from shared.exceptions import NotFoundError, PermissionDeniedError, ValidationError

logger = structlog.get_logger(__name__)


class WorkerService:
    """
    Створення, видалення працівників та зміна паролів.

    Кожна операція дозволена лише адміністратору, і лише в межах його організації.
    """

    def __init__(self, db: Session, admin: Profile):
        """
        Ініціалізує сервіс.

        Args:
            db: Сесія бази даних
            admin: Користувач, що виконує операцію

        Raises:
            PermissionDeniedError: Якщо користувач не адміністратор
        """
        if admin is None or admin.role != UserRole.ADMIN:
            raise PermissionDeniedError("Only admins can manage workers")
        self.db = db
        self.admin = admin
        self.audit = AuditService(db, user_id=admin.id)

    def create_worker(self, data: dict[str, Any]) -> Profile:
        """
        Створює профіль працівника в організації адміністратора.

        Args:
            data: email, password, full_name, phone, position, role

        Returns:
            Створений Profile

        Raises:
            ValidationError: Якщо email вже зайнятий
        """
        email = data["email"].strip().lower()
        with store_errors(self.db):
            existing = self.db.query(Profile).filter(Profile.email == email).first()
            if existing:
                raise ValidationError(f"Email {email} is already registered")

            worker = Profile(
                email=email,
                full_name=data["full_name"],
                phone=data.get("phone"),
                position=data.get("position"),
                role=UserRole(data.get("role", UserRole.WORKER)),
                organization_id=self.admin.organization_id,
                password_hash=get_password_hash(data["password"]),
            )
            self.db.add(worker)
            self.db.flush()

            self.audit.record(
                AuditAction.CREATE,
                Profile.__tablename__,
                worker.id,
                new_data={"email": email, "role": worker.role, "full_name": worker.full_name},
            )
            self.db.commit()
            self.db.refresh(worker)

        logger.info("worker_created", worker_id=worker.id, admin_id=self.admin.id)
        return worker

    def delete_worker(self, worker_id: int) -> None:
        """
        Видаляє працівника разом з його балансом, запитами та сповіщеннями.

        Raises:
            NotFoundError: Якщо працівника не існує
            PermissionDeniedError: Якщо працівник з іншої організації або це сам адміністратор
        """
        with store_errors(self.db):
            worker = self._get_same_org(worker_id)
            if worker.id == self.admin.id:
                raise PermissionDeniedError("Admins cannot delete themselves")

            snapshot = {"email": worker.email, "full_name": worker.full_name, "role": worker.role}

            # Спочатку залежні записи (SQLite не виконує ON DELETE CASCADE без PRAGMA)
            self.db.query(NotificationLog).filter(NotificationLog.user_id == worker_id).delete()
            self.db.query(LeaveRequest).filter(LeaveRequest.worker_id == worker_id).delete()
            self.db.query(LeaveRequest).filter(LeaveRequest.reviewed_by == worker_id).update(
                {LeaveRequest.reviewed_by: None}
            )
            self.db.query(LeaveBalance).filter(LeaveBalance.worker_id == worker_id).delete()
            self.db.delete(worker)

            self.audit.record(AuditAction.DELETE, Profile.__tablename__, worker_id, old_data=snapshot)
            self.db.commit()

        logger.info("worker_deleted", worker_id=worker_id, admin_id=self.admin.id)

    def change_password(self, user_id: int, new_password: str) -> None:
        """
        Встановлює новий пароль користувачу організації.

        Raises:
            NotFoundError: Якщо користувача не існує
            PermissionDeniedError: Якщо користувач з іншої організації
        """
        if len(new_password) < 6:
            raise ValidationError("Password must be at least 6 characters")

        with store_errors(self.db):
            user = self._get_same_org(user_id)
            user.password_hash = get_password_hash(new_password)
            self.audit.record(AuditAction.PASSWORD_CHANGE, Profile.__tablename__, user.id)
            self.db.commit()

        logger.info("password_changed", user_id=user_id, admin_id=self.admin.id)

    def _get_same_org(self, user_id: int) -> Profile:
        user = self.db.get(Profile, user_id)
        if user is None:
            raise NotFoundError(f"Worker {user_id} not found")
        if user.organization_id != self.admin.organization_id:
            raise PermissionDeniedError("Cannot manage workers of another organization")
        return user
