# src/billing/domain/errors.py
"""Billing domain errors and parse failure values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DomainError(Exception):
    """Base class for all billing domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvariantViolation(DomainError):
    """Raised when a SubscriptionRecord would hold an out-of-range value."""
    pass


class ParseFailureKind(str, Enum):
    MISSING_OR_INVALID_EXPIRATION = "missing_or_invalid_expiration"
    PAYLOAD_NOT_A_MAPPING = "payload_not_a_mapping"


@dataclass(frozen=True)
class ParseFailure:
    """
    Why a payload could not become a SubscriptionRecord.

    Returned inside ``Failure``, never raised.
    """

    kind: ParseFailureKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def missing_or_invalid_expiration(cls, raw: object) -> "ParseFailure":
        if raw is None:
            message = "expires_at is missing"
        elif not isinstance(raw, str):
            message = f"expires_at must be a string, got {type(raw).__name__}"
        else:
            message = f"expires_at is not an ISO-8601 timestamp: {raw!r}"
        return cls(ParseFailureKind.MISSING_OR_INVALID_EXPIRATION, message, {"expires_at": raw})

    @classmethod
    def payload_not_a_mapping(cls, payload: object) -> "ParseFailure":
        return cls(
            ParseFailureKind.PAYLOAD_NOT_A_MAPPING,
            f"subscription payload must be a mapping, got {type(payload).__name__}",
        )

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
