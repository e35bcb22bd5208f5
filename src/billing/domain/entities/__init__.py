"""Billing Domain Entities"""
from src.billing.domain.entities.subscription_record import (
    PRODUCTION_ENVIRONMENT,
    SANDBOX_ENVIRONMENT,
    SubscriptionRecord,
    parse_subscription,
)

__all__ = [
    "SubscriptionRecord",
    "parse_subscription",
    "SANDBOX_ENVIRONMENT",
    "PRODUCTION_ENVIRONMENT",
]
