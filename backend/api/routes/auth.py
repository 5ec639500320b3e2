"""Маршрути автентифікації."""

from fastapi import APIRouter, HTTPException, status

from backend.api.dependencies import DBSession
from backend.core.dependencies import CurrentUser
from backend.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)
from backend.models.profile import Profile
from backend.schemas.auth import CurrentUserResponse, RefreshTokenRequest, Token, UserLogin

router = APIRouter(prefix="/auth", tags=["auth"])


def authenticate_user(db, email: str, password: str) -> Profile | None:
    """Автентифікує користувача за email та паролем."""
    user = db.query(Profile).filter(Profile.email == email.strip().lower()).first()
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def _issue_tokens(user: Profile) -> dict:
    access_token = create_access_token(
        data={
            "sub": str(user.id),
            "role": user.role.value,
            "org": user.organization_id,
        },
    )
    refresh_token = create_refresh_token(data={"sub": str(user.id)})
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


@router.post("/login", response_model=Token)
async def login(login_data: UserLogin, db: DBSession):
    """
    Автентифікація користувача та видача токенів (Login).

    Access token використовується для авторизації запитів
    (header `Authorization: Bearer <token>`), refresh token - для отримання нового.

    Errors:
    - **401 Unauthorized**: Невірний email або пароль.
    """
    user = authenticate_user(db, login_data.email, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_tokens(user)


@router.post("/refresh", response_model=Token)
async def refresh_token(request: RefreshTokenRequest, db: DBSession):
    """
    Оновити Access Token за допомогою Refresh Token.

    Errors:
    - **401 Unauthorized**: Якщо refresh token невірний, прострочений або користувач заблокований.
    """
    token_data = decode_token(request.refresh_token)
    if token_data is None or token_data.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    user = db.get(Profile, int(token_data.get("sub", 0)))
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )
    return _issue_tokens(user)


@router.get("/me", response_model=CurrentUserResponse)
async def read_current_user(current_user: CurrentUser):
    """Повертає профіль поточного користувача."""
    return current_user
