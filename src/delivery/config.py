"""
Centralized configuration for the delivery platform.

- Dataclass settings loaded from OS env, with an optional .env file (python-dotenv).
- Strong typing & validation in __post_init__.
- Immutable singleton via functools.lru_cache.
- Secrets never logged (masked).
"""

from __future__ import annotations

import functools
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, cast

from dotenv import load_dotenv

# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _load_dotenv(env_path: Path) -> None:
    if env_path.exists():
        load_dotenv(dotenv_path=str(env_path), override=False)


def _mask_secret(value: Optional[str]) -> str:
    if not value:
        return "<unset>"
    if len(value) <= 8:
        return "***"
    return value[:2] + "…" + value[-2:]


def _get_env_str(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    v = os.getenv(key, default)
    if required and (v is None or str(v).strip() == ""):
        raise ValueError(f"Missing required env var: {key}")
    return v


def _get_env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "t", "yes", "y", "on"}


def _get_env_int(key: str, default: int) -> int:
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Env var {key} must be an integer")


def _validate_choice(value: str, *, choices: tuple[str, ...], key: str) -> str:
    if value not in choices:
        raise ValueError(f"{key} must be one of {choices}, got {value!r}")
    return value


def _validate_database_url(value: str, *, key: str) -> str:
    allowed = ("postgresql+asyncpg://", "sqlite+aiosqlite://")
    if not value.startswith(allowed):
        raise ValueError(f"{key} must start with one of {allowed}")
    return value


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
EnvName = Literal["local", "dev", "staging", "prod"]
LogFormat = Literal["json", "console"]

# Only used when ENVIRONMENT=local and SECRET_KEY is unset.
LOCAL_DEV_SECRET_KEY = "local-dev-secret-key-do-not-use-in-production"


@dataclass(frozen=True)
class Settings:
    # Environment
    environment: EnvName = "local"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./dev.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Security / JWT
    secret_key: str = field(default="")
    jwt_algorithm: str = "HS256"
    access_token_exp_minutes: int = 60
    refresh_token_exp_minutes: int = 60 * 24  # 1 day

    # Account search
    search_email_matches_username: bool = False
    search_empty_is_not_found: bool = True
    default_page_size: int = 10
    max_page_size: int = 100

    # Observability
    log_level: str = "INFO"
    log_format: Optional[LogFormat] = None

    # Derived/computed flags (filled in __post_init__)
    is_prod: bool = field(init=False)
    is_staging: bool = field(init=False)
    is_dev: bool = field(init=False)
    is_local: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "environment",
            _validate_choice(self.environment, choices=("local", "dev", "staging", "prod"), key="ENVIRONMENT"),
        )
        # HS256 only; tokens are verified with the same shared secret.
        _validate_choice(self.jwt_algorithm, choices=("HS256",), key="JWT_ALGORITHM")
        _validate_database_url(self.database_url, key="DATABASE_URL")

        if self.log_format is not None:
            _validate_choice(self.log_format, choices=("json", "console"), key="LOG_FORMAT")

        if not self.secret_key or not self.secret_key.strip():
            raise ValueError("SECRET_KEY must be set and non-empty")
        if self.environment != "local" and self.secret_key == LOCAL_DEV_SECRET_KEY:
            raise ValueError("SECRET_KEY must be overridden outside the local environment")

        if self.access_token_exp_minutes <= 0:
            raise ValueError("ACCESS_TOKEN_EXP_MINUTES must be > 0")
        if self.refresh_token_exp_minutes <= self.access_token_exp_minutes:
            raise ValueError("REFRESH_TOKEN_EXP_MINUTES must be > ACCESS_TOKEN_EXP_MINUTES")

        if self.default_page_size <= 0 or self.max_page_size < self.default_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must be > 0 and <= MAX_PAGE_SIZE")

        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")

        env = self.environment
        object.__setattr__(self, "is_prod", env == "prod")
        object.__setattr__(self, "is_staging", env == "staging")
        object.__setattr__(self, "is_dev", env == "dev")
        object.__setattr__(self, "is_local", env == "local")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    # Safe dict (for debug prints without secrets)
    def safe_dict(self) -> dict:
        return {
            "environment": self.environment,
            "debug": self.debug,
            "database_url": "<masked>" if self.database_url else "<unset>",
            "database_pool_size": self.database_pool_size,
            "database_max_overflow": self.database_max_overflow,
            "secret_key": _mask_secret(self.secret_key),
            "jwt_algorithm": self.jwt_algorithm,
            "access_token_exp_minutes": self.access_token_exp_minutes,
            "refresh_token_exp_minutes": self.refresh_token_exp_minutes,
            "search_email_matches_username": self.search_email_matches_username,
            "search_empty_is_not_found": self.search_empty_is_not_found,
            "default_page_size": self.default_page_size,
            "max_page_size": self.max_page_size,
            "log_level": self.log_level,
            "log_format": self.log_format or "<auto>",
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
_logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    # .env at the repository root (../../.env relative to src/delivery/)
    _load_dotenv(Path(__file__).resolve().parents[2] / ".env")

    environment = cast(EnvName, _get_env_str("ENVIRONMENT", "local") or "local")
    secret_key = _get_env_str("SECRET_KEY", required=environment != "local") or LOCAL_DEV_SECRET_KEY

    settings = Settings(
        environment=environment,
        debug=_get_env_bool("DEBUG", False),
        database_url=_get_env_str("DATABASE_URL", "sqlite+aiosqlite:///./dev.db") or "sqlite+aiosqlite:///./dev.db",
        database_pool_size=_get_env_int("DATABASE_POOL_SIZE", 5),
        database_max_overflow=_get_env_int("DATABASE_MAX_OVERFLOW", 10),
        database_echo=_get_env_bool("DATABASE_ECHO", False),
        secret_key=secret_key,
        jwt_algorithm=_get_env_str("JWT_ALGORITHM", "HS256") or "HS256",
        access_token_exp_minutes=_get_env_int("ACCESS_TOKEN_EXP_MINUTES", 60),
        refresh_token_exp_minutes=_get_env_int("REFRESH_TOKEN_EXP_MINUTES", 60 * 24),
        search_email_matches_username=_get_env_bool("SEARCH_EMAIL_MATCHES_USERNAME", False),
        search_empty_is_not_found=_get_env_bool("SEARCH_EMPTY_IS_NOT_FOUND", True),
        default_page_size=_get_env_int("DEFAULT_PAGE_SIZE", 10),
        max_page_size=_get_env_int("MAX_PAGE_SIZE", 100),
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        log_format=cast(Optional[LogFormat], _get_env_str("LOG_FORMAT", None) or None),
    )

    _logger.info("Settings loaded", extra={"settings": settings.safe_dict()})
    return settings
