"""Pydantic схеми для управління працівниками."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.enums import UserRole


class WorkerCreate(BaseModel):
    """Схема для створення працівника адміністратором."""

    email: str = Field(..., min_length=3, max_length=255, description="Email для входу")
    password: str = Field(..., min_length=6, description="Початковий пароль")
    full_name: str = Field(..., min_length=2, max_length=200, description="Повне ім'я")
    phone: str | None = Field(None, max_length=50)
    position: str | None = Field(None, max_length=100)
    role: UserRole = Field(default=UserRole.WORKER)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Email зберігається в нижньому регістрі."""
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class PasswordChange(BaseModel):
    """Схема для зміни пароля користувача адміністратором."""

    new_password: str = Field(..., min_length=6, description="Новий пароль")


class WorkerResponse(BaseModel):
    """Схема відповіді з профілем."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    phone: str | None = None
    position: str | None = None
    role: UserRole
    organization_id: int | None = None
    is_active: bool
    created_at: datetime | None = None
