"""Сервіс журналу аудиту."""

from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from backend.core.database import store_errors
from backend.models.audit_log import AuditLog
from shared.enums import AuditAction


class AuditService:
    """
    Записує зміни у таблицю audit_logs.

    Запис додається в поточну транзакцію сесії, тому відкочується
    разом з невдалою зміною.
    """

    def __init__(self, db: Session, user_id: int | None = None):
        """
        Ініціалізує сервіс.

        Args:
            db: Сесія бази даних
            user_id: ID користувача, який вносить зміни (None - система)
        """
        self.db = db
        self.user_id = user_id

    def record(
        self,
        action: AuditAction,
        table_name: str,
        record_id: int | None,
        old_data: dict[str, Any] | None = None,
        new_data: dict[str, Any] | None = None,
    ) -> AuditLog:
        """
        Додає запис аудиту.

        Args:
            action: Тип дії
            table_name: Назва таблиці
            record_id: ID запису
            old_data: Значення до зміни
            new_data: Значення після зміни

        Returns:
            Створений AuditLog (ще не закомічений)
        """
        entry = AuditLog(
            user_id=self.user_id,
            action=action.value,
            table_name=table_name,
            record_id=record_id,
            old_data=_jsonable(old_data),
            new_data=_jsonable(new_data),
        )
        self.db.add(entry)
        return entry

    def history(self, table_name: str, record_id: int) -> list[AuditLog]:
        """Повертає історію змін запису, новіші першими."""
        with store_errors():
            return (
                self.db.query(AuditLog)
                .filter(AuditLog.table_name == table_name, AuditLog.record_id == record_id)
                .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
                .all()
            )


def _jsonable(data: dict[str, Any] | None) -> dict[str, Any] | None:
    # Decimal, date та enum не серіалізуються JSON колонкою
    if data is None:
        return None
    result = {}
    for key, value in data.items():
        if isinstance(value, Enum):
            value = value.value
        elif not isinstance(value, (int, bool, str, type(None))):
            value = str(value)
        result[key] = value
    return result
