"""
Structured logging using structlog with:
- JSON/console switchable format
- Correlation ID + billing context (user, subscription, product)
- Identifier masking outside local/dev
- Tiny helper for perf timing

"""

from __future__ import annotations

import contextlib
import datetime
import logging
import logging.config
import sys
import time
import uuid
from typing import Any, Dict, Iterable, Optional

import structlog
from pythonjsonlogger.json import JsonFormatter

from src.shared.config import Settings, get_settings

# ---------------------------------------------------------------------
# Processors
# ---------------------------------------------------------------------


class IdentifierMaskingProcessor:
    """
    Mask the middle of opaque identifiers so prod logs can still be
    correlated without carrying full subscription/user ids.
    """
    MASKED_KEYS = frozenset({"user_id", "subscription_id"})

    def __call__(self, logger, method_name, event_dict):
        for key in self.MASKED_KEYS & event_dict.keys():
            event_dict[key] = self.mask(event_dict[key])
        return event_dict

    @staticmethod
    def mask(value: Any) -> Any:
        if not isinstance(value, str) or not value:
            return value
        if len(value) <= 8:
            return "***"
        return f"{value[:4]}…{value[-4:]}"


def add_timestamp(logger, method_name, event_dict):
    # UTC ISO8601 Z
    now = datetime.datetime.now(datetime.timezone.utc)
    event_dict["timestamp"] = now.strftime("%Y-%m-%dT%H:%M:%SZ")
    return event_dict


def _passthrough(logger, method_name, event_dict):
    return event_dict


# ---------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Generate/bind a correlation_id if not provided; returns the id."""
    cid = correlation_id or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(correlation_id=cid)
    return cid


def bind_billing_context(
    *,
    user_id: Optional[str] = None,
    subscription_id: Optional[str] = None,
    product_id: Optional[str] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Bind billing identifiers for every subsequent log line in this context."""
    payload = {
        k: v
        for k, v in dict(
            user_id=user_id,
            subscription_id=subscription_id,
            product_id=product_id,
        ).items()
        if v is not None
    }
    if extras:
        payload.update(extras)
    if payload:
        structlog.contextvars.bind_contextvars(**payload)


def clear_context() -> None:
    """Clear all bound contextvars (call at the end of a sync/restore job)."""
    structlog.contextvars.clear_contextvars()


@contextlib.contextmanager
def time_block(name: str, *, logger: Optional[structlog.stdlib.BoundLogger] = None, labels: Optional[Dict[str, str]] = None):
    """
    Time a block and log it as a performance metric.
    Usage:
        with time_block("billing.parse_batch", logger=log, labels={"source": "restore"}):
            records = parse_subscriptions(payloads)
    """
    _log = logger or structlog.get_logger("performance")
    t0 = time.perf_counter()
    try:
        yield
    finally:
        ms = (time.perf_counter() - t0) * 1000.0
        _log.info("Performance metric", metric_name=name, value=round(ms, 3), unit="ms", labels=labels or {})


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------

def _ensure_log_format(settings: Settings) -> str:
    """
    Output format:
      - settings.log_format when set ("json"|"console").
      - Else "console" for local/dev, "json" for staging/prod.
    """
    if settings.log_format in ("json", "console"):
        return settings.log_format
    return "console" if settings.is_local or settings.is_dev else "json"


def _level_name_to_int(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def build_processors(settings: Settings) -> list[Any]:
    log_format = _ensure_log_format(settings)
    is_prod_like = settings.is_prod or settings.is_staging

    processors: Iterable[Any] = [
        # Bound correlation id and billing ids; explicit event values win
        structlog.contextvars.merge_contextvars,
        add_timestamp,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        # Keep raw ids locally to help debugging
        IdentifierMaskingProcessor() if is_prod_like else _passthrough,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer(),
    ]
    return list(processors)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Idempotent structured logging configuration."""
    settings = settings or get_settings()
    log_format = _ensure_log_format(settings)

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
            "console": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if log_format == "json" else "console",
                "stream": sys.stdout,
            },
        },
        "root": {
            "level": _level_name_to_int(settings.log_level),
            "handlers": ["console"],
        },
    })

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=settings.service_name)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
