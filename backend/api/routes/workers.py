"""API маршрути для управління працівниками (лише адміністратор)."""

from fastapi import APIRouter, status

from backend.api.dependencies import DBSession
from backend.core.dependencies import AdminUser
from backend.schemas.responses import SuccessResponse
from backend.schemas.worker import PasswordChange, WorkerCreate, WorkerResponse
from backend.services.worker_service import WorkerService

router = APIRouter(prefix="/workers", tags=["workers"])


@router.post("", response_model=WorkerResponse, status_code=status.HTTP_201_CREATED)
async def create_worker(data: WorkerCreate, db: DBSession, admin: AdminUser):
    """
    Створити працівника в організації адміністратора.

    Errors:
    - **422**: Email вже зареєстровано.
    """
    return WorkerService(db, admin).create_worker(data.model_dump())


@router.delete("/{worker_id}", response_model=SuccessResponse)
async def delete_worker(worker_id: int, db: DBSession, admin: AdminUser):
    """
    Видалити працівника разом з його балансом, запитами та сповіщеннями.

    Errors:
    - **404**: Працівника не існує.
    - **403**: Працівник з іншої організації або спроба видалити себе.
    """
    WorkerService(db, admin).delete_worker(worker_id)
    return SuccessResponse(message="Worker deleted")


@router.post("/{worker_id}/password", response_model=SuccessResponse)
async def change_worker_password(worker_id: int, data: PasswordChange, db: DBSession, admin: AdminUser):
    """Встановити новий пароль працівнику організації."""
    WorkerService(db, admin).change_password(worker_id, data.new_password)
    return SuccessResponse(message="Password changed")
