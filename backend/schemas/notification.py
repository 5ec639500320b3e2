"""Pydantic схеми для сповіщень."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from shared.enums import NotificationType


class NotificationResponse(BaseModel):
    """Одне сповіщення."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    notification_type: NotificationType
    title: str
    body: str
    entity_type: str | None = None
    entity_id: int | None = None
    sent_at: datetime
    is_read: bool = False


class NotificationListResponse(BaseModel):
    """Останні сповіщення користувача з кількістю непрочитаних."""

    items: list[NotificationResponse]
    unread_count: int
