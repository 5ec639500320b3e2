"""API маршрути для балансів годин відпустки та ROL."""

from fastapi import APIRouter

from backend.api.dependencies import DBSession
from backend.core.dependencies import AdminUser, CurrentUser
from backend.models.leave_balance import LeaveBalance
from backend.models.profile import Profile
from backend.schemas.leave import LeaveBalanceResponse, LeaveBalanceUpdate
from backend.services.leave_balance_service import LeaveBalanceService
from shared.exceptions import NotFoundError, PermissionDeniedError

router = APIRouter(prefix="/leave-balances", tags=["leave-balances"])


def _to_response(worker: Profile, balance: LeaveBalance | None) -> LeaveBalanceResponse:
    # Неналаштований баланс показується нулями
    if balance is None:
        return LeaveBalanceResponse(worker_id=worker.id, worker_name=worker.full_name, configured=False)
    return LeaveBalanceResponse(
        worker_id=worker.id,
        worker_name=worker.full_name,
        vacation_hours=balance.vacation_hours,
        rol_hours=balance.rol_hours,
        configured=True,
        updated_at=balance.updated_at,
    )


def _get_org_worker(db, admin: Profile, worker_id: int) -> Profile:
    worker = db.get(Profile, worker_id)
    if worker is None:
        raise NotFoundError(f"Worker {worker_id} not found")
    if worker.organization_id != admin.organization_id:
        raise PermissionDeniedError("Cannot access workers of another organization")
    return worker


@router.get("", response_model=list[LeaveBalanceResponse])
async def list_leave_balances(db: DBSession, admin: AdminUser):
    """
    Отримати баланси всіх працівників організації.

    Працівники без налаштованого балансу повертаються з `configured = false`
    та нульовими значеннями.
    """
    pairs = LeaveBalanceService(db).list_balances(admin.organization_id)
    return [_to_response(worker, balance) for worker, balance in pairs]


@router.get("/me", response_model=LeaveBalanceResponse)
async def get_my_leave_balance(db: DBSession, current_user: CurrentUser):
    """Отримати власний баланс годин."""
    balance = LeaveBalanceService(db).get_balance(current_user.id)
    return _to_response(current_user, balance)


@router.get("/{worker_id}", response_model=LeaveBalanceResponse)
async def get_leave_balance(worker_id: int, db: DBSession, admin: AdminUser):
    """
    Отримати баланс працівника.

    Errors:
    - **404 Not Found**: Працівника не існує.
    - **403 Forbidden**: Працівник з іншої організації.
    """
    worker = _get_org_worker(db, admin, worker_id)
    balance = LeaveBalanceService(db).get_balance(worker_id)
    return _to_response(worker, balance)


@router.put("/{worker_id}", response_model=LeaveBalanceResponse)
async def set_leave_balance(
    worker_id: int,
    data: LeaveBalanceUpdate,
    db: DBSession,
    admin: AdminUser,
):
    """
    Встановити баланс годин працівника.

    Значення замінюють попередні (не додаються). Вже подані запити
    не перевіряються проти нового значення.
    """
    worker = _get_org_worker(db, admin, worker_id)
    service = LeaveBalanceService(db, changed_by=admin.id)
    balance = service.set_balance(worker_id, data.vacation_hours, data.rol_hours)
    return _to_response(worker, balance)
