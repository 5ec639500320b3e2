"""Налаштування додатку через Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.constants import HOURS_PER_DAY


class Settings(BaseSettings):
    """Налаштування додатку, що завантажуються з .env файлу або змінних середовища."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WM_",
        extra="ignore",
    )

    # APP
    app_name: str = Field(default="WorkforceManager", description="Назва додатку")
    app_version: str = Field(default="1.0.0", description="Версія додатку")
    debug: bool = Field(default=False, description="Режим налагодження")

    # DATABASE
    database_url: str = Field(
        default="sqlite:///./workforce_manager.db",
        description="URL бази даних (SQLite або PostgreSQL)",
    )

    # SECURITY
    secret_key: str = Field(
        default="change-me-in-production-use-secrets-manager",
        description="Секретний ключ для JWT токенів",
    )
    access_token_expire_minutes: int = Field(
        default=24 * 60,  # 24 години
        description="Час життя JWT токена в хвилинах",
    )
    algorithm: str = Field(default="HS256", description="Алгоритм шифрування JWT")

    # WEB SERVER
    host: str = Field(default="127.0.0.1", description="Хост для FastAPI сервера")
    port: int = Field(default=8000, description="Порт для FastAPI сервера")
    reload: bool = Field(default=False, description="Автоматичний перезапуск при зміні коду")

    # STORAGE
    storage_dir: Path = Field(
        default=Path("./storage"),
        description="Директорія для зберігання довідок та вкладень",
    )

    # LOGGING
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Рівень логування",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Формат логування",
    )
    log_to_file: bool = Field(
        default=True,
        description="Чи дублювати логи у файл logs/workforce_manager.log",
    )

    # LEAVE
    hours_per_day: int = Field(
        default=HOURS_PER_DAY,
        description="Кількість годин в одному дні відпустки/лікарняного",
    )
    strict_balance_check: bool = Field(
        default=False,
        description="Вважати відсутній баланс нульовим замість необмеженого",
    )

    # NOTIFICATIONS
    notification_window_days: int = Field(
        default=2,
        description="За скільки останніх днів показувати сповіщення",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Повертає кешований екземпляр налаштувань.

    Returns:
        Settings: Екземпляр налаштувань додатку
    """
    return Settings()
