"""Модель запиту на відсутність (відпустка, ROL, лікарняний)."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.models.base import Base, TimestampMixin
from shared.enums import LeaveRequestStatus, LeaveRequestType, get_leave_type_label

if TYPE_CHECKING:
    from backend.models.profile import Profile


class LeaveRequest(Base, TimestampMixin):
    """
    Запит працівника на відсутність.

    Статус змінюється рівно один раз: pending -> approved або pending -> rejected.

    Attributes:
        id: Унікальний ідентифікатор
        worker_id: ID працівника, що подав запит
        organization_id: ID організації
        request_type: Тип (vacation, rol, sick_leave)
        start_date: Початок (для vacation/sick_leave)
        end_date: Кінець включно (для vacation/sick_leave)
        hours_requested: Кількість запитаних годин
        reason: Причина (обов'язкова для ROL)
        certificate_url: Посилання на довідку (обов'язкове для sick_leave)
        status: Статус розгляду
        reviewed_by: ID адміністратора, що розглянув запит
        reviewed_at: Час розгляду
    """

    __tablename__ = "leave_requests"

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
    request_type: Mapped[LeaveRequestType] = mapped_column(SQLEnum(LeaveRequestType), nullable=False)
    start_date: Mapped[date | None] = mapped_column(nullable=True)
    end_date: Mapped[date | None] = mapped_column(nullable=True)
    hours_requested: Mapped[Decimal] = mapped_column(Numeric(7, 2), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    certificate_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[LeaveRequestStatus] = mapped_column(
        SQLEnum(LeaveRequestStatus),
        nullable=False,
        default=LeaveRequestStatus.PENDING,
        index=True,
    )
    reviewed_by: Mapped[int | None] = mapped_column(
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    worker: Mapped["Profile"] = relationship(foreign_keys=[worker_id])
    reviewer: Mapped["Profile | None"] = relationship(foreign_keys=[reviewed_by])

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveRequestStatus.PENDING

    @property
    def type_label(self) -> str:
        """Назва типу для відображення (Ferie, ROL, Malattia)."""
        return get_leave_type_label(self.request_type.value)

    def __repr__(self) -> str:
        return f"<LeaveRequest {self.id}: {self.request_type.value} {self.status.value} ({self.hours_requested}h)>"
