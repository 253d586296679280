"""Runtime configuration helpers."""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple

try:  # Load environment variables from a .env file if present
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:  # pragma: no cover - optional dependency
    pass


PRODUCTION_ENVIRONMENTS = {"production", "prod"}


@dataclass(frozen=True)
class Settings:
    """Resolved application configuration."""

    jwt_secret: str
    environment: str = "development"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24
    log_level: str = "INFO"
    seed_demo_data: bool = True
    bcrypt_rounds: int = 12
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))

    @property
    def is_production(self) -> bool:
        return self.environment in PRODUCTION_ENVIRONMENTS


def _get_int_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError as exc:  # pragma: no cover - clearly surface misconfiguration
        raise ValueError(f"Environment variable {name} must be an integer; got {raw!r}") from exc


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_jwt_secret(environment: str) -> str:
    secret = os.getenv("JWT_SECRET") or os.getenv("SESSION_SECRET")
    if secret:
        return secret
    if environment in PRODUCTION_ENVIRONMENTS:
        raise RuntimeError("JWT_SECRET must be configured in production")
    # Tokens signed with a per-process secret do not survive a restart.
    return secrets.token_urlsafe(48)


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment."""

    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    origins = tuple(
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    )
    return Settings(
        jwt_secret=_resolve_jwt_secret(environment),
        environment=environment,
        jwt_expire_hours=_get_int_env("JWT_EXPIRE_HOURS") or 24,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        seed_demo_data=_get_bool_env("SEED_DEMO_DATA", True),
        bcrypt_rounds=_get_int_env("BCRYPT_ROUNDS") or 12,
        cors_origins=origins or ("*",),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings derived from the environment."""

    return load_settings()


__all__ = ["Settings", "get_settings", "load_settings"]
