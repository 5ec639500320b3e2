"""Ініціалізація ORM моделей."""

# Базові класи та mixins
from backend.models.base import Base, TimestampMixin

# Моделі
from backend.models.organization import Organization
from backend.models.profile import Profile
from backend.models.leave_balance import LeaveBalance
from backend.models.leave_request import LeaveRequest
from backend.models.notification import NotificationLog
from backend.models.audit_log import AuditLog

__all__ = [
    "Base",
    "TimestampMixin",
    "Organization",
    "Profile",
    "LeaveBalance",
    "LeaveRequest",
    "NotificationLog",
    "AuditLog",
]
