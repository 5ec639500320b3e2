"""Custom exceptions for WorkforceManager."""


class WorkforceManagerError(Exception):
    """Базовий клас для всіх винятків системи."""

    pass


class ValidationError(WorkforceManagerError):
    """Виникає при валідації даних."""

    pass


class InsufficientBalanceError(WorkforceManagerError):
    """Виникає коли запитаних годин більше, ніж залишок балансу."""

    def __init__(self, message: str, requested=None, available=None):
        super().__init__(message)
        self.requested = requested
        self.available = available


class InvalidStateError(WorkforceManagerError):
    """Виникає при спробі недопустимого переходу статусу."""

    pass


class NotFoundError(WorkforceManagerError):
    """Виникає коли запис не знайдено."""

    pass


class PermissionDeniedError(WorkforceManagerError):
    """Виникає коли користувач не має прав на дію."""

    pass


class StoreUnavailableError(WorkforceManagerError):
    """Виникає коли сховище даних недоступне."""

    pass
