import os

from dotenv import load_dotenv

load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./alfred-database.db")
SQL_ECHO = _get_bool(os.getenv("SQL_ECHO"), default=False)

APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = os.getenv("APP_PORT", "8080")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

def get_port() -> int:
    try:
        port = int(APP_PORT)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"APP_PORT must be an integer, got {APP_PORT!r}.") from exc
    if not 0 < port < 65536:
        raise RuntimeError(f"APP_PORT must be between 1 and 65535, got {port}.")
    return port


def validate_runtime_config() -> None:
    if not DATABASE_URL.strip():
        raise RuntimeError("DATABASE_URL must not be empty.")
    get_port()
