"""
Application settings.

Every field is read from its environment variable when a ``Settings``
is instantiated; the module level ``settings`` instance is built once
at import.  Tests and embedders can build their own ``Settings`` and
hand it to ``create_app`` instead.
"""

import os
from dataclasses import dataclass, field


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: str):
    return field(default_factory=lambda: int(os.getenv(name, default)))


def _env_bool(name: str, default: str = "false"):
    return field(default_factory=lambda: os.getenv(name, default).lower() in {"1", "true", "yes"})


def _env_list(name: str, default: str):
    def _read() -> list[str]:
        raw = os.getenv(name, default)
        return [item.strip() for item in raw.split(",") if item.strip()]

    return field(default_factory=_read)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = _env("PROJECT_NAME", "Event Management API")
    api_version: str = _env("API_VERSION", "1.0.0")
    host: str = _env("HOST", "0.0.0.0")
    port: int = _env_int("PORT", "3000")
    log_level: str = _env("LOG_LEVEL", "INFO")

    # Any SQLAlchemy URL.  ``sqlite://`` (no path) gives an in-memory
    # database shared by every session of the engine.
    database_url: str = _env("DATABASE_URL", "sqlite:///./events.db")
    sql_echo: bool = _env_bool("SQL_ECHO")

    cors_origins: list[str] = _env_list("CORS_ORIGINS", "*")


settings = Settings()
