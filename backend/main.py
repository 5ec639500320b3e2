"""Головний файл FastAPI додатку."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.api.routes import auth, availability, leave_balances, leave_requests, notifications, workers
from backend.core.config import get_settings
from backend.core.database import engine
from backend.core.logging import setup_logging
from backend.models import Base
from shared.exceptions import (
    InsufficientBalanceError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    StoreUnavailableError,
    ValidationError,
    WorkforceManagerError,
)

settings = get_settings()
logger = logging.getLogger(__name__)

# Відповідність доменних помилок HTTP статусам
ERROR_STATUS_CODES: dict[type[WorkforceManagerError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InsufficientBalanceError: status.HTTP_409_CONFLICT,
    InvalidStateError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield
    logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title="WorkforceManager API",
    description="""
    API для управління відсутностями працівників.

    ## Основні можливості

    * **Баланси**: Години відпустки (Ferie) та ROL для кожного працівника.
    * **Запити**: Подання, погодження та відхилення запитів на відсутність.
    * **Доступність**: Календар працівників у відсутності на дату або місяць.
    * **Сповіщення**: Журнал сповіщень для адміністраторів та працівників.

    ## Авторизація

    API використовує JWT (Bearer token) авторизацію.
    1. Отримайте токен через `/api/auth/login`.
    2. Додавайте заголовок `Authorization: Bearer <token>` до кожного запиту.
    """,
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшені обмежити
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WorkforceManagerError)
async def domain_error_handler(request: Request, exc: WorkforceManagerError):
    """Перетворює доменні помилки на відповідь {"detail": ...}."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            status_code = ERROR_STATUS_CODES[error_type]
            break

    if status_code >= 500:
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# Routes
app.include_router(auth.router, prefix="/api")
app.include_router(leave_balances.router, prefix="/api")
app.include_router(leave_requests.router, prefix="/api")
app.include_router(availability.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")
app.include_router(workers.router, prefix="/api")


@app.get("/")
async def root():
    """Коренева точка API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Перевірка здоров'я API."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
