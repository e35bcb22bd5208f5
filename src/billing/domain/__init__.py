"""
Billing Domain Layer
Pure domain model with no framework dependencies
"""
from src.billing.domain.entities import SubscriptionRecord, parse_subscription
from src.billing.domain.errors import (
    DomainError,
    InvariantViolation,
    ParseFailure,
    ParseFailureKind,
)
from src.billing.domain.events import SubscriptionStatusChanged
from src.billing.domain.payload import PayloadReader
from src.billing.domain.services import EntitlementRules
from src.billing.domain.types import Payload, StatusCode

__all__ = [
    "StatusCode",
    "Payload",
    "SubscriptionRecord",
    "parse_subscription",
    "PayloadReader",
    "EntitlementRules",
    "SubscriptionStatusChanged",
    "DomainError",
    "InvariantViolation",
    "ParseFailure",
    "ParseFailureKind",
]
