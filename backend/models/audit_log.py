"""Модель журналу аудиту."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from backend.models.base import Base


class AuditLog(Base):
    """
    Простий журнал змін без версіонування.

    Attributes:
        id: Унікальний ідентифікатор
        user_id: Хто виконав дію (None - система)
        action: Тип дії (create, update, delete, approve, reject, password_change)
        table_name: Таблиця, якої стосується зміна
        record_id: ID зміненого запису
        old_data: Значення до зміни
        new_data: Значення після зміни
        created_at: Час дії
    """

    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(nullable=True, index=True)
    action: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    table_name: Mapped[str] = mapped_column(String(50), nullable=False)
    record_id: Mapped[int | None] = mapped_column(nullable=True)
    old_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    new_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<AuditLog {self.id}: {self.action} {self.table_name}#{self.record_id}>"
