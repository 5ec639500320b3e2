"""API маршрути для запитів на відсутність."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Literal, Union

from fastapi import APIRouter, Body, File, HTTPException, Query, UploadFile, status
import structlog

from backend.api.dependencies import LeaveRequestSvc
from backend.core.config import get_settings
from backend.core.dependencies import AdminUser, CurrentUser
from backend.schemas.leave import (
    CertificateUploadResponse,
    LeaveRequestListResponse,
    LeaveRequestResponse,
    RolRequestCreate,
    SickLeaveRequestCreate,
    VacationRequestCreate,
)
from backend.schemas.responses import ErrorResponse
from shared.constants import ALLOWED_EXTENSIONS, CERTIFICATES_SUBDIR, MAX_FILE_SIZE
from shared.enums import LeaveRequestStatus

router = APIRouter(
    prefix="/leave-requests",
    tags=["leave-requests"],
    responses={
        404: {"model": ErrorResponse, "description": "Запит не знайдено"},
        409: {"model": ErrorResponse, "description": "Недостатньо годин або запит вже розглянуто"},
    },
)
logger = structlog.get_logger(__name__)

LeaveRequestBody = Annotated[
    Union[VacationRequestCreate, RolRequestCreate, SickLeaveRequestCreate],
    Body(discriminator="request_type"),
]


def _list_response(requests) -> LeaveRequestListResponse:
    items = [LeaveRequestResponse.from_model(r) for r in requests]
    return LeaveRequestListResponse(items=items, total=len(items))


@router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave_request(
    payload: LeaveRequestBody,
    service: LeaveRequestSvc,
    current_user: CurrentUser,
):
    """
    Подати запит на відсутність.

    Тіло запиту визначається полем `request_type`:
    - **vacation**: `start_date`, `end_date`; години = дні * 8
    - **rol**: `hours` (1-24) та обов'язковий `reason`
    - **sick_leave**: `start_date`, `end_date` та `certificate_url`

    Errors:
    - **422**: Бракує обов'язкових полів.
    - **409**: Запитано більше годин, ніж залишилось на балансі.
    """
    request = service.submit_request(current_user, payload)
    return LeaveRequestResponse.from_model(request)


@router.get("/me", response_model=LeaveRequestListResponse)
async def list_my_leave_requests(service: LeaveRequestSvc, current_user: CurrentUser):
    """Власні запити працівника, новіші першими."""
    return _list_response(service.list_for_worker(current_user.id))


@router.get("", response_model=LeaveRequestListResponse)
async def list_leave_requests(
    service: LeaveRequestSvc,
    admin: AdminUser,
    status_filter: Annotated[
        Literal["all", "pending", "approved", "rejected"],
        Query(alias="status"),
    ] = "pending",
):
    """
    Запити організації для розгляду.

    За замовчуванням повертаються лише запити, що очікують рішення.
    """
    status_value = None if status_filter == "all" else LeaveRequestStatus(status_filter)
    return _list_response(service.list_for_organization(admin.organization_id, status_value))


@router.post("/certificates", response_model=CertificateUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_certificate(
    file: Annotated[UploadFile, File(...)],
    current_user: CurrentUser,
):
    """
    Завантажити медичну довідку для лікарняного.

    Повернуте значення `certificate_url` передається в запит sick_leave.

    Валідація:
    - Максимальний розмір: 10MB
    - Дозволені формати: PDF, JPG, JPEG, PNG
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="File name is missing")

    file_ext = Path(file.filename).suffix.lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
        )

    contents = await file.read()
    if len(contents) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum: {MAX_FILE_SIZE / 1024 / 1024:.1f} MB",
        )

    timestamp = datetime.now().strftime("%Y%m%d%H%M%S%f")
    relative_path = Path(CERTIFICATES_SUBDIR) / f"{current_user.id}_{timestamp}{file_ext}"
    save_path = Path(get_settings().storage_dir) / relative_path
    try:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        save_path.write_bytes(contents)
    except OSError as e:
        logger.error("certificate_save_failed", user_id=current_user.id, error=str(e))
        raise HTTPException(status_code=500, detail="Could not store the certificate") from e

    logger.info("certificate_uploaded", user_id=current_user.id, path=relative_path.as_posix(), size=len(contents))
    return CertificateUploadResponse(
        certificate_url=relative_path.as_posix(),
        filename=file.filename,
        size=len(contents),
    )


@router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(request_id: int, service: LeaveRequestSvc, current_user: CurrentUser):
    """Отримати запит (власний або будь-який запит організації для адміністратора)."""
    return LeaveRequestResponse.from_model(service.get_request(request_id, current_user))


@router.post("/{request_id}/approve", response_model=LeaveRequestResponse)
async def approve_leave_request(request_id: int, service: LeaveRequestSvc, admin: AdminUser):
    """
    Погодити запит.

    Години відпустки або ROL списуються з балансу в тій же транзакції.

    Errors:
    - **404**: Запиту не існує.
    - **409**: Запит вже розглянуто або недостатньо годин.
    """
    request = service.review_request(request_id, LeaveRequestStatus.APPROVED, admin)
    return LeaveRequestResponse.from_model(request)


@router.post("/{request_id}/reject", response_model=LeaveRequestResponse)
async def reject_leave_request(request_id: int, service: LeaveRequestSvc, admin: AdminUser):
    """Відхилити запит. Баланс не змінюється."""
    request = service.review_request(request_id, LeaveRequestStatus.REJECTED, admin)
    return LeaveRequestResponse.from_model(request)
