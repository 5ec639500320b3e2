"""API маршрути для сповіщень користувача."""

from fastapi import APIRouter

from backend.api.dependencies import NotificationSvc
from backend.core.config import get_settings
from backend.core.dependencies import CurrentUser
from backend.schemas.notification import NotificationListResponse, NotificationResponse
from backend.schemas.responses import SuccessResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(service: NotificationSvc, current_user: CurrentUser):
    """
    Останні сповіщення поточного користувача.

    Повертаються сповіщення за останні `notification_window_days` днів
    (не більше 20), новіші першими.
    """
    items = service.recent_for_user(current_user.id, window_days=get_settings().notification_window_days)
    return NotificationListResponse(
        items=[NotificationResponse.model_validate(n) for n in items],
        unread_count=sum(1 for n in items if not n.is_read),
    )


@router.post("/read-all", response_model=SuccessResponse)
async def mark_all_notifications_read(service: NotificationSvc, current_user: CurrentUser):
    """Позначити всі сповіщення прочитаними."""
    count = service.mark_all_read(current_user.id)
    return SuccessResponse(message=f"{count} notifications marked as read")


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(notification_id: int, service: NotificationSvc, current_user: CurrentUser):
    """Позначити сповіщення прочитаним."""
    return service.mark_read(current_user.id, notification_id)
