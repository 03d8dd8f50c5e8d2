import os
from dataclasses import dataclass


DEFAULT_SECRET_KEY = "change-me"


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    cors_origin: str
    log_level: str
    session_lifetime_days: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def normalize_database_url(url: str) -> str:
    # Some providers still hand out the legacy postgres:// scheme, which SQLAlchemy rejects.
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def load_settings() -> Settings:
    days_raw = _getenv("SESSION_LIFETIME_DAYS", "30")
    try:
        days = int(days_raw)
    except ValueError:
        days = 30
    return Settings(
        secret_key=_getenv("SECRET_KEY") or _getenv("SESSION_SECRET", DEFAULT_SECRET_KEY),
        env=_getenv("ENV", "development"),
        database_url=normalize_database_url(_getenv("DATABASE_URL", "sqlite:///fairgroup.db")),
        cors_origin=_getenv("CORS_ORIGIN", ""),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        session_lifetime_days=days if days > 0 else 30,
    )


@dataclass(frozen=True)
class ServerSettings:
    """gunicorn process settings read by scripts/start.py."""

    port: int
    workers: int
    threads: int
    timeout: int


def _bounded_int(name: str, default: int, *, minimum: int = 1, maximum: int | None = None) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} value '{raw}'. Must be an integer.") from None
    if value < minimum or (maximum is not None and value > maximum):
        upper = maximum if maximum is not None else "inf"
        raise ValueError(f"Invalid {name} value '{raw}'. Must be in range {minimum}-{upper}.")
    return value


def load_server_settings() -> ServerSettings:
    return ServerSettings(
        port=_bounded_int("PORT", 8080, maximum=65535),
        workers=_bounded_int("WEB_CONCURRENCY", 2),
        threads=_bounded_int("GUNICORN_THREADS", 4),
        timeout=_bounded_int("GUNICORN_TIMEOUT", 60),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "CORS_ORIGIN": s.cors_origin,
        "LOG_LEVEL": s.log_level,
        "SESSION_LIFETIME_DAYS": s.session_lifetime_days,
        # session cookie defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
        # JSON bodies only; nothing here accepts uploads
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }
