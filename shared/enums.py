"""Enumerations for WorkforceManager.

All system-wide enums are defined here.
"""
from enum import Enum


# Mapping dictionaries for UI labels
LEAVE_TYPE_LABELS: dict[str, str] = {
    "vacation": "Ferie",
    "rol": "ROL",
    "sick_leave": "Malattia",
}

LEAVE_STATUS_LABELS: dict[str, str] = {
    "pending": "In Attesa",
    "approved": "Approvata",
    "rejected": "Rifiutata",
}


def get_leave_type_label(value: str) -> str:
    """Get Italian label for leave request type value."""
    return LEAVE_TYPE_LABELS.get(value, value)


def get_leave_status_label(value: str) -> str:
    """Get Italian label for leave request status value."""
    return LEAVE_STATUS_LABELS.get(value, value)


class UserRole(str, Enum):
    """Роль користувача в організації"""
    ADMIN = "admin"                    # Адміністратор організації
    WORKER = "worker"                  # Працівник
    ORG_MANAGER = "org_manager"        # Менеджер організації
    SALES_MANAGER = "sales_manager"    # Менеджер з продажу
    ADMINISTRATOR = "administrator"    # Адміністративний персонал


class LeaveRequestType(str, Enum):
    """Тип запиту на відсутність"""
    VACATION = "vacation"              # Відпустка (Ferie)
    ROL = "rol"                        # Години ROL (Riduzione Orario di Lavoro)
    SICK_LEAVE = "sick_leave"          # Лікарняний (Malattia)


class LeaveRequestStatus(str, Enum):
    """Статус запиту на відсутність"""
    PENDING = "pending"                # Очікує розгляду
    APPROVED = "approved"              # Погоджено
    REJECTED = "rejected"              # Відхилено


class NotificationType(str, Enum):
    """Тип сповіщення"""
    ANNOUNCEMENT = "announcement"
    ASSIGNMENT = "assignment"
    LEAVE_REQUEST = "leave_request"
    LEAVE_RESPONSE = "leave_response"


class AuditAction(str, Enum):
    """Тип дії для журналу аудиту"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    REJECT = "reject"
    PASSWORD_CHANGE = "password_change"
