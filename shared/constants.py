"""Константи WorkforceManager."""

from decimal import Decimal

# Тривалість робочого дня для перерахунку днів у години
HOURS_PER_DAY = 8

# Межі вибору годин ROL у формі запиту
ROL_MIN_HOURS = 1
ROL_MAX_HOURS = 24

# Максимальне значення балансу, яке адміністратор може встановити
BALANCE_MAX_HOURS = 999

ZERO_HOURS = Decimal("0")

# Директорія для зберігання довідок
CERTIFICATES_SUBDIR = "certificates"

# Завантаження файлів
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB
ALLOWED_EXTENSIONS = {".pdf", ".jpg", ".jpeg", ".png"}

# Сповіщення показуються за останні N днів, не більше LIMIT записів
NOTIFICATION_WINDOW_DAYS = 2
NOTIFICATION_LIST_LIMIT = 20

# Заголовки сповіщень
LEAVE_REQUEST_TITLE = "Nuova Richiesta Permesso"
LEAVE_RESPONSE_TITLES = {
    "approved": "Richiesta Permesso Approvata",
    "rejected": "Richiesta Permesso Rifiutata",
}
LEAVE_RESPONSE_STATUS_TEXT = {
    "approved": "approvata",
    "rejected": "rifiutata",
}
