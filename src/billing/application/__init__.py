"""
Billing Application Layer
Use cases over parsed subscription records
"""
from src.billing.application.subscription_parser import (
    active_subscriptions,
    parse_subscription_logged,
    parse_subscriptions,
)

__all__ = [
    "parse_subscription_logged",
    "parse_subscriptions",
    "active_subscriptions",
]
