"""Dependency Injection для FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.core.database import get_db
from backend.services.availability_service import AvailabilityService
from backend.services.leave_request_service import LeaveRequestService
from backend.services.notification_service import NotificationService


def get_notification_service(
    db: Annotated[Session, Depends(get_db)],
) -> NotificationService:
    """
    Dependency для NotificationService.

    Args:
        db: Сесія бази даних

    Returns:
        Екземпляр NotificationService
    """
    return NotificationService(db)


def get_leave_request_service(
    db: Annotated[Session, Depends(get_db)],
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
) -> LeaveRequestService:
    """
    Dependency для LeaveRequestService.

    Args:
        db: Сесія бази даних
        notifications: Сервіс сповіщень

    Returns:
        Екземпляр LeaveRequestService
    """
    return LeaveRequestService(db, notifications)


def get_availability_service(
    db: Annotated[Session, Depends(get_db)],
) -> AvailabilityService:
    """Dependency для AvailabilityService."""
    return AvailabilityService(db)


# Типізовані aliases для зручності
DBSession = Annotated[Session, Depends(get_db)]
NotificationSvc = Annotated[NotificationService, Depends(get_notification_service)]
LeaveRequestSvc = Annotated[LeaveRequestService, Depends(get_leave_request_service)]
AvailabilitySvc = Annotated[AvailabilityService, Depends(get_availability_service)]
