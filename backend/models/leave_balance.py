"""Модель балансу годин відпустки та ROL."""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from backend.models.profile import Profile


class LeaveBalance(Base, TimestampMixin):
    """
    Залишок годин відпустки та ROL працівника.

    Один запис на працівника: профіль належить рівно одній організації,
    тому organization_id лише дублює організацію профілю. Створюється при першому
    редагуванні адміністратором, змінюється редагуванням або погодженням запиту.

    Attributes:
        id: Унікальний ідентифікатор
        worker_id: ID працівника
        organization_id: ID організації
        vacation_hours: Залишок годин відпустки
        rol_hours: Залишок годин ROL
    """

    __tablename__ = "leave_balances"
    __table_args__ = (
        UniqueConstraint("worker_id", name="uq_leave_balances_worker"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    worker_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    vacation_hours: Mapped[Decimal] = mapped_column(Numeric(7, 2), nullable=False, default=Decimal("0"))
    rol_hours: Mapped[Decimal] = mapped_column(Numeric(7, 2), nullable=False, default=Decimal("0"))

    worker: Mapped["Profile"] = relationship(back_populates="leave_balance")

    def hours_for(self, request_type: str) -> Decimal | None:
        """
        Повертає залишок для типу запиту.

        Returns:
            Decimal для vacation/rol, None для типів без обмеження (sick_leave)
        """
        if request_type == "vacation":
            return self.vacation_hours
        if request_type == "rol":
            return self.rol_hours
        return None

    def __repr__(self) -> str:
        return f"<LeaveBalance worker={self.worker_id}: {self.vacation_hours}h / ROL {self.rol_hours}h>"
