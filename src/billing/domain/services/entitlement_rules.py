# src/billing/domain/services/entitlement_rules.py
"""Entitlement rules domain service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..types import StatusCode

if TYPE_CHECKING:
    from ..entities.subscription_record import SubscriptionRecord


class EntitlementRules:
    """
    Decide premium access from subscription status alone.

    Status is asserted by the backend. ``expires_date`` is never compared
    against the device clock here because the user can change it.
    """

    ENTITLED_STATUSES: frozenset[StatusCode] = frozenset({
        StatusCode.TRIAL,
        StatusCode.INTRODUCTORY_OFFER,
        StatusCode.PROMOTIONAL_OFFER,
        StatusCode.REGULAR,
        StatusCode.GRACE_PERIOD,
    })

    TERMINAL_STATUSES: frozenset[StatusCode] = frozenset({
        StatusCode.REFUNDED,
        StatusCode.EXPIRED,
    })

    @classmethod
    def grants_access(cls, status: StatusCode) -> bool:
        """True if a subscription in ``status`` should unlock premium content."""
        return status in cls.ENTITLED_STATUSES

    @classmethod
    def is_terminal_status(cls, status: StatusCode) -> bool:
        return status in cls.TERMINAL_STATUSES

    @classmethod
    def is_active(cls, record: "SubscriptionRecord") -> bool:
        return cls.grants_access(record.status)
