"""Pydantic схеми для балансів та запитів на відсутність."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from shared.constants import BALANCE_MAX_HOURS, ROL_MAX_HOURS, ROL_MIN_HOURS
from shared.enums import LeaveRequestStatus, LeaveRequestType, get_leave_status_label, get_leave_type_label


class LeaveBalanceUpdate(BaseModel):
    """Схема для встановлення балансу адміністратором."""

    vacation_hours: Decimal = Field(..., ge=0, le=BALANCE_MAX_HOURS, description="Години відпустки")
    rol_hours: Decimal = Field(..., ge=0, le=BALANCE_MAX_HOURS, description="Години ROL")


class LeaveBalanceResponse(BaseModel):
    """Схема відповіді з балансом працівника."""

    model_config = ConfigDict(from_attributes=True)

    worker_id: int
    worker_name: str | None = None
    vacation_hours: Decimal = Decimal("0")
    rol_hours: Decimal = Decimal("0")
    configured: bool = True
    updated_at: datetime | None = None


# Запит має три варіанти з різними обов'язковими полями. Обов'язковість
# перевіряє LeaveRequestService, щоб повідомлення були однаковими для API та сервісів.

class VacationRequestCreate(BaseModel):
    """Запит на відпустку (Ferie): діапазон дат, години = дні * 8."""

    request_type: Literal["vacation"] = "vacation"
    start_date: date | None = Field(None, description="Перший день відпустки")
    end_date: date | None = Field(None, description="Останній день відпустки (включно)")
    reason: str | None = Field(None, max_length=1000)


class RolRequestCreate(BaseModel):
    """Запит на години ROL: кількість годин та обов'язкова причина."""

    request_type: Literal["rol"] = "rol"
    hours: Decimal | None = Field(None, ge=ROL_MIN_HOURS, le=ROL_MAX_HOURS, description="Кількість годин")
    reason: str | None = Field(None, max_length=1000)


class SickLeaveRequestCreate(BaseModel):
    """Лікарняний (Malattia): діапазон дат та обов'язкова довідка."""

    request_type: Literal["sick_leave"] = "sick_leave"
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = Field(None, max_length=1000)
    certificate_url: str | None = Field(None, max_length=500, description="Посилання на довідку")


LeaveRequestPayload = Annotated[
    Union[VacationRequestCreate, RolRequestCreate, SickLeaveRequestCreate],
    Field(discriminator="request_type"),
]


class LeaveRequestResponse(BaseModel):
    """Схема відповіді із запитом на відсутність."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    worker_id: int
    organization_id: int | None = None
    request_type: LeaveRequestType
    start_date: date | None = None
    end_date: date | None = None
    hours_requested: Decimal
    reason: str | None = None
    certificate_url: str | None = None
    status: LeaveRequestStatus
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    type_label: str | None = None
    status_label: str | None = None

    @classmethod
    def from_model(cls, request) -> "LeaveRequestResponse":
        response = cls.model_validate(request)
        response.type_label = get_leave_type_label(request.request_type.value)
        response.status_label = get_leave_status_label(request.status.value)
        return response


class LeaveRequestListResponse(BaseModel):
    """Список запитів."""

    items: list[LeaveRequestResponse]
    total: int


class CertificateUploadResponse(BaseModel):
    """Відповідь після завантаження довідки."""

    certificate_url: str
    filename: str
    size: int
