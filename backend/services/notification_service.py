"""Сервіс сповіщень.

Сповіщення записуються в таблицю notification_logs, яку клієнти опитують.
Надсилання - best-effort: помилка запису сповіщення логується і ніколи
не відкочує дію, що його спричинила.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.database import store_errors
from backend.models.notification import NotificationLog
from backend.models.profile import Profile
from shared.constants import (
    LEAVE_REQUEST_TITLE,
    LEAVE_RESPONSE_STATUS_TEXT,
    LEAVE_RESPONSE_TITLES,
    NOTIFICATION_LIST_LIMIT,
    NOTIFICATION_WINDOW_DAYS,
)
from shared.enums import NotificationType, UserRole
from shared.exceptions import NotFoundError, StoreUnavailableError

logger = structlog.get_logger(__name__)


@dataclass
class NotificationResult:
    """Підсумок розсилки."""

    total: int = 0
    logged: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class NotificationService:
    """Запис та читання сповіщень користувачів."""

    def __init__(self, db: Session):
        """
        Args:
            db: Сесія бази даних
        """
        self.db = db

    def notify(
        self,
        kind: NotificationType,
        recipient_ids: list[int],
        title: str,
        body: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        organization_id: int | None = None,
    ) -> NotificationResult:
        """
        Записує сповіщення для кожного отримувача.

        Викликається після коміту основної транзакції. Будь-яка помилка
        сховища відкочує лише рядки сповіщень і не піднімається далі.

        Returns:
            NotificationResult з кількістю записаних сповіщень
        """
        result = NotificationResult(total=len(recipient_ids))
        if not recipient_ids:
            return result

        try:
            for user_id in recipient_ids:
                self.db.add(
                    NotificationLog(
                        user_id=user_id,
                        organization_id=organization_id,
                        notification_type=kind,
                        title=title,
                        body=body,
                        entity_type=entity_type,
                        entity_id=entity_id,
                        sent_at=datetime.now(),
                    )
                )
            self.db.commit()
            result.logged = len(recipient_ids)
        except SQLAlchemyError as e:
            self.db.rollback()
            result.errors.append(str(e))
            logger.error(
                "notification_failed",
                kind=kind.value,
                recipients=recipient_ids,
                entity_type=entity_type,
                entity_id=entity_id,
                error=str(e),
            )
            return result

        logger.info("notification_sent", kind=kind.value, recipients=len(recipient_ids), entity_id=entity_id)
        return result

    def notify_leave_request(
        self,
        worker_name: str,
        leave_request_id: int,
        organization_id: int | None = None,
    ) -> NotificationResult:
        """
        Повідомляє адміністраторів організації про новий запит на відсутність.

        Отримувачі визначаються тут же, тому помилка сховища при їх пошуку
        так само лише логується.
        """
        try:
            recipients = self.admin_ids(organization_id)
        except (StoreUnavailableError, SQLAlchemyError) as e:
            logger.error(
                "notification_recipients_failed",
                kind=NotificationType.LEAVE_REQUEST.value,
                organization_id=organization_id,
                entity_id=leave_request_id,
                error=str(e),
            )
            return NotificationResult(errors=[str(e)])

        return self.notify(
            NotificationType.LEAVE_REQUEST,
            recipients,
            title=LEAVE_REQUEST_TITLE,
            body=f"{worker_name} ha richiesto un permesso",
            entity_type="leave_request",
            entity_id=leave_request_id,
            organization_id=organization_id,
        )

    def notify_leave_response(
        self,
        worker_id: int,
        status: str,
        leave_request_id: int,
        organization_id: int | None = None,
    ) -> NotificationResult:
        """Повідомляє працівника про рішення щодо його запиту."""
        status_text = LEAVE_RESPONSE_STATUS_TEXT[status]
        return self.notify(
            NotificationType.LEAVE_RESPONSE,
            [worker_id],
            title=LEAVE_RESPONSE_TITLES[status],
            body=f"La tua richiesta di permesso è stata {status_text}",
            entity_type="leave_request",
            entity_id=leave_request_id,
            organization_id=organization_id,
        )

    def admin_ids(self, organization_id: int | None) -> list[int]:
        """ID всіх активних адміністраторів організації."""
        with store_errors(self.db):
            rows = (
                self.db.query(Profile.id)
                .filter(
                    Profile.organization_id == organization_id,
                    Profile.role == UserRole.ADMIN,
                    Profile.is_active == True,
                )
                .all()
            )
        return [row.id for row in rows]

    def recent_for_user(
        self,
        user_id: int,
        window_days: int = NOTIFICATION_WINDOW_DAYS,
        limit: int = NOTIFICATION_LIST_LIMIT,
    ) -> list[NotificationLog]:
        """Сповіщення користувача за останні window_days днів, новіші першими."""
        since = datetime.now() - timedelta(days=window_days)
        with store_errors(self.db):
            return (
                self.db.query(NotificationLog)
                .filter(NotificationLog.user_id == user_id, NotificationLog.sent_at >= since)
                .order_by(NotificationLog.sent_at.desc(), NotificationLog.id.desc())
                .limit(limit)
                .all()
            )

    def mark_read(self, user_id: int, notification_id: int) -> NotificationLog:
        """
        Позначає сповіщення прочитаним.

        Raises:
            NotFoundError: Якщо сповіщення не існує або належить іншому користувачу
            StoreUnavailableError: Якщо сховище недоступне
        """
        with store_errors(self.db):
            notification = (
                self.db.query(NotificationLog)
                .filter(NotificationLog.id == notification_id, NotificationLog.user_id == user_id)
                .one_or_none()
            )
            if notification is None:
                raise NotFoundError(f"Notification {notification_id} not found")
            if notification.read_at is None:
                notification.read_at = datetime.now()
                self.db.commit()
        return notification

    def mark_all_read(self, user_id: int) -> int:
        """Позначає всі непрочитані сповіщення користувача. Повертає їх кількість."""
        with store_errors(self.db):
            count = (
                self.db.query(NotificationLog)
                .filter(NotificationLog.user_id == user_id, NotificationLog.read_at.is_(None))
                .update({NotificationLog.read_at: datetime.now()}, synchronize_session=False)
            )
            self.db.commit()
        return count
