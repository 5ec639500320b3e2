"""Модель журналу сповіщень."""

from datetime import datetime

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from backend.models.base import Base
from shared.enums import NotificationType


class NotificationLog(Base):
    """
    Запис про сповіщення, надіслане користувачу.

    Клієнти опитують цю таблицю, позначки прочитання зберігаються в read_at.

    Attributes:
        id: Унікальний ідентифікатор
        user_id: Отримувач
        organization_id: ID організації
        notification_type: Тип сповіщення
        title: Заголовок
        body: Текст
        entity_type: Тип пов'язаної сутності (leave_request, announcement...)
        entity_id: ID пов'язаної сутності
        sent_at: Час надсилання
        read_at: Час прочитання (None - не прочитано)
    """

    __tablename__ = "notification_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=True,
    )
    notification_type: Mapped[NotificationType] = mapped_column(SQLEnum(NotificationType), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    entity_id: Mapped[int | None] = mapped_column(nullable=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), nullable=False, index=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def __repr__(self) -> str:
        return f"<NotificationLog {self.id}: {self.notification_type.value} -> {self.user_id}>"
