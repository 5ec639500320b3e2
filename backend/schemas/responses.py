"""Спільні схеми відповідей API."""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Базова схема успішної відповіді."""

    success: bool = True
    message: str = "Operation completed successfully"


class ErrorResponse(BaseModel):
    """Схема відповіді з помилкою."""

    detail: str
