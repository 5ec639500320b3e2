"""Сервіс балансів годин відпустки та ROL."""

from decimal import Decimal

import structlog
from sqlalchemy import update
from sqlalchemy.orm import Session

from backend.core.database import store_errors
from backend.models.leave_balance import LeaveBalance
from backend.models.profile import Profile
from backend.services.audit_service import AuditService
from shared.enums import AuditAction, LeaveRequestType, UserRole
from shared.exceptions import InsufficientBalanceError, NotFoundError, ValidationError
from shared.validators import validate_non_negative_hours

logger = structlog.get_logger(__name__)

# Колонка балансу для кожного типу запиту, що має обмеження
BALANCE_COLUMNS = {
    LeaveRequestType.VACATION: LeaveBalance.vacation_hours,
    LeaveRequestType.ROL: LeaveBalance.rol_hours,
}


class LeaveBalanceService:
    """
    Сховище залишків годин відпустки та ROL.

    Баланс - простий облік, а не резервування: адміністратор може встановити
    значення нижче вже запитаних годин, списання відбувається лише при погодженні.
    """

    def __init__(self, db: Session, changed_by: int | None = None):
        """
        Ініціалізує сервіс.

        Args:
            db: Сесія бази даних
            changed_by: ID користувача, який вносить зміни
        """
        self.db = db
        self.changed_by = changed_by

    def get_balance(self, worker_id: int) -> LeaveBalance | None:
        """
        Повертає баланс працівника.

        Відсутність запису не є помилкою і означає "ще не налаштовано".
        """
        with store_errors():
            return (
                self.db.query(LeaveBalance)
                .filter(LeaveBalance.worker_id == worker_id)
                .one_or_none()
            )

    def set_balance(
        self,
        worker_id: int,
        vacation_hours: Decimal | int | float,
        rol_hours: Decimal | int | float,
    ) -> LeaveBalance:
        """
        Встановлює (upsert) залишки годин працівника.

        Повторний виклик з тими самими значеннями нічого не накопичує.

        Args:
            worker_id: ID працівника
            vacation_hours: Нове значення годин відпустки
            rol_hours: Нове значення годин ROL

        Returns:
            Збережений LeaveBalance

        Raises:
            ValidationError: Якщо значення від'ємні
            NotFoundError: Якщо працівника не існує
        """
        try:
            vacation = validate_non_negative_hours(Decimal(str(vacation_hours)))
            rol = validate_non_negative_hours(Decimal(str(rol_hours)))
        except ValueError as e:
            raise ValidationError(str(e)) from e

        with store_errors(self.db):
            worker = self.db.get(Profile, worker_id)
            if worker is None:
                raise NotFoundError(f"Worker {worker_id} not found")

            balance = self.get_balance(worker_id)
            audit = AuditService(self.db, user_id=self.changed_by)

            if balance is None:
                balance = LeaveBalance(
                    worker_id=worker_id,
                    organization_id=worker.organization_id,
                    vacation_hours=vacation,
                    rol_hours=rol,
                )
                self.db.add(balance)
                self.db.flush()
                audit.record(
                    AuditAction.CREATE,
                    LeaveBalance.__tablename__,
                    balance.id,
                    new_data={"vacation_hours": vacation, "rol_hours": rol},
                )
            else:
                previous = {"vacation_hours": balance.vacation_hours, "rol_hours": balance.rol_hours}
                balance.vacation_hours = vacation
                balance.rol_hours = rol
                balance.touch()
                audit.record(
                    AuditAction.UPDATE,
                    LeaveBalance.__tablename__,
                    balance.id,
                    old_data=previous,
                    new_data={"vacation_hours": vacation, "rol_hours": rol},
                )

            self.db.commit()

        logger.info("leave_balance_set", worker_id=worker_id, vacation_hours=str(vacation), rol_hours=str(rol))
        return balance

    def debit(self, worker_id: int, kind: LeaveRequestType, hours: Decimal) -> bool:
        """
        Списує години з балансу одним умовним UPDATE.

        Не комітить: викликається всередині транзакції погодження запиту.

        Args:
            worker_id: ID працівника
            kind: Тип запиту
            hours: Кількість годин для списання

        Returns:
            False якщо запису балансу немає, True якщо списано
            (або тип не має обмеженого балансу)

        Raises:
            InsufficientBalanceError: Якщо запис є, але годин недостатньо
        """
        column = BALANCE_COLUMNS.get(LeaveRequestType(kind))
        if column is None:
            return True

        with store_errors():
            result = self.db.execute(
                update(LeaveBalance)
                .where(LeaveBalance.worker_id == worker_id, column >= hours)
                .values({column.key: column - hours})
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                balance = self.get_balance(worker_id)
                if balance is not None:
                    self.db.refresh(balance)
                return True

            balance = self.get_balance(worker_id)

        if balance is None:
            return False

        available = balance.hours_for(LeaveRequestType(kind).value)
        raise InsufficientBalanceError(
            f"Insufficient {LeaveRequestType(kind).value} balance: requested {hours}h, available {available}h",
            requested=hours,
            available=available,
        )

    def list_balances(self, organization_id: int | None) -> list[tuple[Profile, LeaveBalance | None]]:
        """
        Повертає всіх не-адміністраторів організації разом з балансами.

        Returns:
            Список пар (працівник, баланс або None), відсортований за ім'ям
        """
        with store_errors():
            workers = (
                self.db.query(Profile)
                .filter(
                    Profile.organization_id == organization_id,
                    Profile.role != UserRole.ADMIN,
                )
                .order_by(Profile.full_name)
                .all()
            )
            balances = {
                b.worker_id: b
                for b in self.db.query(LeaveBalance)
                .filter(LeaveBalance.organization_id == organization_id)
                .all()
            }
        return [(worker, balances.get(worker.id)) for worker in workers]
