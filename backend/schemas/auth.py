"""Схеми Pydantic для автентифікації."""

from pydantic import BaseModel, Field

from shared.enums import UserRole


class Token(BaseModel):
    """Схема для відповіді JWT токена."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserLogin(BaseModel):
    """Схема для запиту логіну."""
    email: str = Field(..., min_length=3, max_length=255, description="Email користувача")
    password: str = Field(..., min_length=6, description="Пароль")


class CurrentUserResponse(BaseModel):
    """Дані поточного користувача."""
    id: int
    email: str
    full_name: str
    role: UserRole
    organization_id: int | None = None

    class Config:
        from_attributes = True


class RefreshTokenRequest(BaseModel):
    """Схема для оновлення токена."""
    refresh_token: str
