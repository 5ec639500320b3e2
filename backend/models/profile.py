"""Модель профілю користувача (працівника або адміністратора)."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.models.base import Base, TimestampMixin
from shared.enums import UserRole

if TYPE_CHECKING:
    from backend.models.leave_balance import LeaveBalance
    from backend.models.organization import Organization


class Profile(Base, TimestampMixin):
    """
    Профіль користувача організації.

    Attributes:
        id: Унікальний ідентифікатор
        email: Email для входу
        full_name: Повне ім'я
        phone: Телефон
        position: Посада
        role: Роль в організації
        organization_id: ID організації
        password_hash: bcrypt хеш пароля
        is_active: Чи активний обліковий запис
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[UserRole] = mapped_column(SQLEnum(UserRole), nullable=False, default=UserRole.WORKER)
    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    organization: Mapped["Organization | None"] = relationship(back_populates="members")
    leave_balance: Mapped["LeaveBalance | None"] = relationship(
        back_populates="worker",
        cascade="all, delete-orphan",
        uselist=False,
    )

    @property
    def is_admin(self) -> bool:
        """Чи є користувач адміністратором організації."""
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<Profile {self.id}: {self.full_name} ({self.role.value})>"
