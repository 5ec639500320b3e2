"""Спільні валідатори для використання в Pydantic моделях та сервісах."""

from decimal import Decimal


def validate_non_negative_hours(value: Decimal) -> Decimal:
    """
    Перевіряє, що кількість годин не від'ємна.

    Raises:
        ValueError: Якщо годин менше нуля
    """
    if value < 0:
        raise ValueError("Hours must not be negative")
    return value

