# src/billing/domain/events.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from src.shared.domain.domain_event import DomainEvent

from .types import StatusCode


@dataclass(frozen=True)
class SubscriptionStatusChanged(DomainEvent):
    """Backend reconciliation moved a subscription to a new status."""

    aggregate_type: str = "SubscriptionRecord"
    previous_status: StatusCode = StatusCode.EXPIRED
    new_status: StatusCode = StatusCode.EXPIRED
    previous_active: bool = False
    new_active: bool = False
    reason: Optional[str] = None  # e.g., "refund_notification" | "renewal"

    @property
    def subscription_id(self) -> str:
        return self.aggregate_id

    @property
    def entitlement_changed(self) -> bool:
        return self.previous_active != self.new_active

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            previous_status=self.previous_status.token,
            new_status=self.new_status.token,
            previous_active=self.previous_active,
            new_active=self.new_active,
            reason=self.reason,
        )
        return data
