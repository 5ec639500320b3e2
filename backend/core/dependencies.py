"""Залежності для автентифікації."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from backend.core.database import get_db
from backend.core.security import decode_token
from backend.models.profile import Profile
from shared.enums import UserRole

# OAuth2 схема для отримання токена з заголовку
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Profile:
    """
    Залежність для отримання поточного користувача з токена.

    Args:
        token: JWT токен з заголовку Authorization
        db: Сесія бази даних

    Returns:
        Профіль користувача

    Raises:
        HTTPException: Якщо токен недійсний або користувача не існує
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = decode_token(token)
    if token_data is None or token_data.get("type") != "access":
        raise credentials_exception

    user_id = token_data.get("sub")
    if user_id is None:
        raise credentials_exception

    profile = db.get(Profile, int(user_id))
    if profile is None or not profile.is_active:
        raise credentials_exception

    return profile


def require_role(allowed_roles: list[UserRole]):
    """
    Фабрика залежностей для перевірки ролі користувача.

    Args:
        allowed_roles: Список дозволених ролей

    Returns:
        Залежність
    """
    async def role_checker(
        current_user: Profile = Depends(get_current_user)
    ) -> Profile:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user

    return role_checker


# Готові залежності для різних ролей
require_admin = require_role([UserRole.ADMIN])

CurrentUser = Annotated[Profile, Depends(get_current_user)]
AdminUser = Annotated[Profile, Depends(require_admin)]
