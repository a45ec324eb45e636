"""
Process settings read from the environment.

`.env` is loaded with python-dotenv before reading. The resulting `Settings`
is stored on `app.state.settings` and handed to handlers via
`Depends(get_settings)`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from fastapi import Request

DEFAULT_JWT_SECRET = "dev_secret"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    app_env: str = "development"
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 8
    db_pool_max_size: int = 1
    db_command_timeout: int = 30
    seed_demo_data: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()
        return cls(
            database_url=os.environ.get("DATABASE_URL", "").strip(),
            app_env=_env_str("APP_ENV", "development"),
            jwt_secret=_env_str("JWT_SECRET", DEFAULT_JWT_SECRET),
            jwt_algorithm=_env_str("JWT_ALG", "HS256"),
            access_token_expire_hours=_env_int("ACCESS_TOKEN_EXPIRE_HOURS", 8),
            db_pool_max_size=_env_int("DB_POOL_MAX_SIZE", 1),
            db_command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
            seed_demo_data=_env_bool("SEED_DEMO_DATA", True),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> None:
        if not self.database_url:
            raise RuntimeError("DATABASE_URL is not set.")
        if self.is_production and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set to a non-default value in production.")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
