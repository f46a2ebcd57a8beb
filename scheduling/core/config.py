import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


APP_ENV = os.getenv("APP_ENV", "development")
APP_URL = os.getenv("APP_URL", "http://localhost:8000").rstrip("/")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL")

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:3000"])

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(7 * 24 * 60)))

APPOINTMENTS_PAGE_SIZE = int(os.getenv("APPOINTMENTS_PAGE_SIZE", "20"))
APPOINTMENTS_MAX_PAGE = int(os.getenv("APPOINTMENTS_MAX_PAGE", "10000"))
CANCELLATION_NOTICE_HOURS = int(os.getenv("CANCELLATION_NOTICE_HOURS", "2"))

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")

MAIL_HOST = os.getenv("MAIL_HOST", "")
MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
MAIL_USER = os.getenv("MAIL_USER", "")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
MAIL_SECURE = _get_bool(os.getenv("MAIL_SECURE"), default=True)
MAIL_FROM = os.getenv("MAIL_FROM", "Equipe Agendamentos <noreply@agendamentos.com>")

QUEUE_MAX_ATTEMPTS = int(os.getenv("QUEUE_MAX_ATTEMPTS", "3"))


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be set.")
