# src/billing/domain/entities/subscription_record.py
"""Subscription purchase record as reported by the billing backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Mapping, Optional

from src.shared.domain.domain_event import DomainEvent
from src.shared.domain.result import Failure, Result, Success
from src.shared.utils.dates import to_iso8601, utcnow
from src.shared.utils.serialization import dumps

from ..errors import InvariantViolation, ParseFailure
from ..events import SubscriptionStatusChanged
from ..payload import PayloadReader
from ..services.entitlement_rules import EntitlementRules
from ..types import JsonDict, Payload, StatusCode

SANDBOX_ENVIRONMENT = "sandbox"
PRODUCTION_ENVIRONMENT = "production"

Clock = Callable[[], datetime]

_MUTABLE_FIELDS = frozenset({"status"})
_STRING_FIELDS = ("id", "product_id", "group_id")
_FLAG_FIELDS = (
    "is_sandbox",
    "is_local",
    "is_in_retry_billing",
    "is_autorenew_enabled",
    "is_introductory_activated",
)


@dataclass
class SubscriptionRecord:
    """
    One auto-renewable subscription of the current customer.

    Everything except ``status`` is fixed at construction; ``status`` is
    updated by backend reconciliation through ``apply_status``.

    Use ``is_active()`` to decide access. Do not compare ``expires_date``
    with the current time: the device clock is user-controlled.

    ``is_introductory_activated`` only says an introductory offer was used
    in this subscription; a False value does not make the customer eligible
    for one.
    """

    id: str
    product_id: str
    group_id: str
    status: StatusCode
    expires_date: datetime
    started_at: datetime
    canceled_at: Optional[datetime] = None  # refund date; None unless refunded
    is_sandbox: bool = False
    is_local: bool = False  # purchased with a local StoreKit configuration
    is_in_retry_billing: bool = False
    is_autorenew_enabled: bool = False  # False once the user turned off renewal
    is_introductory_activated: bool = False
    _pending_events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Validate record invariants, then freeze every field but status."""
        for name in _STRING_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise InvariantViolation(f"{name} must be a string", {"field": name})
        for name in _FLAG_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise InvariantViolation(f"{name} must be a bool", {"field": name})
        if not isinstance(self.expires_date, datetime):
            raise InvariantViolation("expires_date is required", {"field": "expires_date"})
        if not isinstance(self.started_at, datetime):
            raise InvariantViolation("started_at must be a datetime", {"field": "started_at"})
        if self.canceled_at is not None and not isinstance(self.canceled_at, datetime):
            raise InvariantViolation("canceled_at must be a datetime or None", {"field": "canceled_at"})
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "status" and not isinstance(value, StatusCode):
            raise InvariantViolation(
                f"status must be a StatusCode, got {value!r}", {"field": "status"}
            )
        if getattr(self, "_sealed", False) and name not in _MUTABLE_FIELDS:
            raise AttributeError(f"SubscriptionRecord.{name} is read-only")
        object.__setattr__(self, name, value)

    @classmethod
    def from_payload(cls, payload: Payload, *, clock: Clock = utcnow) -> "SubscriptionRecord | None":
        """Build a record from a backend payload, or None if it has no valid expires_at."""
        return parse_subscription(payload, clock=clock).or_else(None)

    def is_active(self) -> bool:
        """True if the customer should have access to premium content."""
        return EntitlementRules.is_active(self)

    def apply_status(self, new_status: StatusCode, *, reason: Optional[str] = None) -> bool:
        """
        Move to ``new_status`` as reported by the backend.

        Records a SubscriptionStatusChanged event when the status actually
        changes. Returns True if it did.
        """
        if not isinstance(new_status, StatusCode):
            raise InvariantViolation(
                f"status must be a StatusCode, got {new_status!r}", {"field": "status"}
            )
        previous = self.status
        if new_status is previous:
            return False

        self.status = new_status
        self._pending_events.append(
            SubscriptionStatusChanged(
                aggregate_id=self.id,
                previous_status=previous,
                new_status=new_status,
                previous_active=EntitlementRules.grants_access(previous),
                new_active=EntitlementRules.grants_access(new_status),
                reason=reason,
            )
        )
        return True

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear the pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events

    def to_payload(self) -> JsonDict:
        """Wire-shaped mapping; parsing it back yields an equal record."""
        return {
            "id": self.id,
            "product_id": self.product_id,
            "group_id": self.group_id,
            "status": self.status.token,
            "expires_at": to_iso8601(self.expires_date),
            "started_at": to_iso8601(self.started_at),
            "cancelled_at": to_iso8601(self.canceled_at) if self.canceled_at else None,
            "environment": SANDBOX_ENVIRONMENT if self.is_sandbox else PRODUCTION_ENVIRONMENT,
            "local": self.is_local,
            "in_retry_billing": self.is_in_retry_billing,
            "autorenew_enabled": self.is_autorenew_enabled,
            "introductory_activated": self.is_introductory_activated,
        }

    def to_json(self) -> str:
        return dumps(self.to_payload(), sort_keys=True)


def parse_subscription(payload: Payload, *, clock: Clock = utcnow) -> Result[SubscriptionRecord, ParseFailure]:
    """
    Translate a backend payload into a SubscriptionRecord.

    Only ``expires_at`` is required. Every other field is read on its own
    and falls back to its default (empty string, False, None, or ``clock()``
    for ``started_at``) when missing or malformed. Unknown keys are ignored.
    """
    if not isinstance(payload, Mapping):
        return Failure(ParseFailure.payload_not_a_mapping(payload))

    reader = PayloadReader(payload)

    expires_date = reader.instant("expires_at")
    if expires_date is None:
        return Failure(ParseFailure.missing_or_invalid_expiration(reader.raw("expires_at")))

    # A missing status goes straight to EXPIRED rather than through the token table
    raw_status = reader.optional_string("status")
    status = StatusCode.from_token(raw_status) if raw_status is not None else StatusCode.EXPIRED

    record = SubscriptionRecord(
        id=reader.string("id"),
        product_id=reader.string("product_id"),
        group_id=reader.string("group_id"),
        status=status,
        expires_date=expires_date,
        started_at=reader.instant("started_at") or clock(),
        canceled_at=reader.instant("cancelled_at"),
        is_sandbox=reader.string("environment") == SANDBOX_ENVIRONMENT,
        is_local=reader.flag("local"),
        is_in_retry_billing=reader.flag("in_retry_billing"),
        is_autorenew_enabled=reader.flag("autorenew_enabled"),
        is_introductory_activated=reader.flag("introductory_activated"),
    )
    return Success(record)
