"""Налаштування бази даних та сесій SQLAlchemy."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from backend.core.config import get_settings
from shared.exceptions import StoreUnavailableError

settings = get_settings()

# Створення двигуна бази даних
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
    echo=settings.debug,
)

# Фабрика сесій
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency для FastAPI - надає сесію бази даних.

    Yields:
        Session: Сесія SQLAlchemy
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session | None = None) -> Generator[None, None, None]:
    """
    Перетворює помилки з'єднання з БД на StoreUnavailableError.

    Якщо передано сесію, незавершена транзакція відкочується,
    щоб не залишити часткових змін.

    Example:
        with store_errors(self.db):
            self.db.commit()
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        if db is not None:
            db.rollback()
        raise StoreUnavailableError(f"Data store unavailable: {e.orig or e}") from e
