# src/billing/application/subscription_parser.py
"""
Parse subscription payloads handed over by the network layer.

The domain parser is pure; this module is where discarded payloads get
logged and where lists of backend subscriptions are turned into records.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from src.billing.domain.entities import SubscriptionRecord, parse_subscription
from src.billing.domain.entities.subscription_record import Clock
from src.billing.domain.errors import ParseFailure
from src.billing.domain.types import Payload
from src.shared.logging import get_logger, time_block
from src.shared.utils.dates import utcnow

logger = get_logger(__name__)


def _present_keys(payload: object) -> list[str]:
    if isinstance(payload, Mapping):
        return sorted(str(k) for k in payload.keys())
    return []


def _log_discarded(payload: object, failure: ParseFailure, *, index: Optional[int] = None) -> None:
    logger.warning(
        "Discarding subscription payload",
        reason=failure.kind.value,
        detail=failure.message,
        index=index,
        subscription_id=payload.get("id") if isinstance(payload, Mapping) else None,
        keys=_present_keys(payload),
    )


def parse_subscription_logged(payload: Payload, *, clock: Clock = utcnow) -> SubscriptionRecord | None:
    """Parse one payload; log and return None if it cannot become a record."""
    result = parse_subscription(payload, clock=clock)
    if result.is_failure():
        _log_discarded(payload, result.error)
        return None

    record = result.value
    logger.debug(
        "Parsed subscription",
        subscription_id=record.id,
        product_id=record.product_id,
        status=record.status.token,
        active=record.is_active(),
    )
    return record


def parse_subscriptions(payloads: Iterable[Payload], *, clock: Clock = utcnow) -> list[SubscriptionRecord]:
    """
    Parse a backend list of subscriptions.

    Valid records keep their input order; invalid payloads are dropped and
    logged without affecting the others.
    """
    records: list[SubscriptionRecord] = []
    discarded = 0
    with time_block("billing.parse_subscriptions", logger=logger):
        for index, payload in enumerate(payloads):
            result = parse_subscription(payload, clock=clock)
            if result.is_failure():
                discarded += 1
                _log_discarded(payload, result.error, index=index)
                continue
            records.append(result.value)

    logger.info(
        "Parsed subscription list",
        parsed=len(records),
        discarded=discarded,
        active=sum(1 for r in records if r.is_active()),
    )
    return records


def active_subscriptions(records: Iterable[SubscriptionRecord]) -> list[SubscriptionRecord]:
    """Records that currently grant premium access."""
    return [r for r in records if r.is_active()]
