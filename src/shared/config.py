"""
Centralized configuration for the billing subscription model.

- Pure dataclass settings, no Pydantic.
- Loads a .env file via python-dotenv, then reads OS env (OS env wins).
- Strong typing & validation in __post_init__.
- Immutable singleton via functools.lru_cache.
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, cast

from dotenv import load_dotenv

# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
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


def _validate_choice(value: str, *, choices: tuple[str, ...], key: str) -> str:
    if value not in choices:
        raise ValueError(f"{key} must be one of {choices}, got {value!r}")
    return value


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
EnvName = Literal["local", "dev", "staging", "prod"]
LogFormat = Literal["json", "console"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    # Environment
    environment: EnvName = "local"
    debug: bool = False

    # Observability
    service_name: str = "billing"
    log_level: str = "INFO"
    log_format: Optional[LogFormat] = None  # None -> derived from environment

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
        object.__setattr__(
            self, "log_level",
            _validate_choice(self.log_level.upper(), choices=_LOG_LEVELS, key="LOG_LEVEL"),
        )
        if self.log_format is not None:
            _validate_choice(self.log_format, choices=("json", "console"), key="LOG_FORMAT")

        if not self.service_name or not self.service_name.strip():
            raise ValueError("SERVICE_NAME must be non-empty")

        object.__setattr__(self, "is_prod", self.environment == "prod")
        object.__setattr__(self, "is_staging", self.environment == "staging")
        object.__setattr__(self, "is_dev", self.environment == "dev")
        object.__setattr__(self, "is_local", self.environment == "local")

    def safe_dict(self) -> dict:
        return {
            "environment": self.environment,
            "debug": self.debug,
            "service_name": self.service_name,
            "log_level": self.log_level,
            "log_format": self.log_format or "<derived>",
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
_logger = logging.getLogger(__name__)


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Build Settings from .env (if present) and the OS environment."""
    env_file = env_file or Path(__file__).resolve().parent.parent.parent / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=str(env_file), override=False)

    log_format = _get_env_str("LOG_FORMAT", None) or None
    return Settings(
        environment=cast(EnvName, _get_env_str("ENVIRONMENT", "local") or "local"),
        debug=_get_env_bool("DEBUG", False),
        service_name=_get_env_str("SERVICE_NAME", "billing") or "billing",
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        log_format=cast(Optional[LogFormat], log_format),
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = load_settings()
    _logger.debug("Settings loaded", extra={"settings": settings.safe_dict()})
    return settings
