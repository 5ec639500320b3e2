"""Модель організації (тенанта)."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from backend.models.profile import Profile


class Organization(Base, TimestampMixin):
    """
    Організація - межа тенанта. Всі сутності належать рівно одній організації.

    Attributes:
        id: Унікальний ідентифікатор
        name: Назва організації
        slug: Короткий унікальний ідентифікатор для URL
    """

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    members: Mapped[list["Profile"]] = relationship(back_populates="organization")

    def __repr__(self) -> str:
        return f"<Organization {self.id}: {self.slug}>"
