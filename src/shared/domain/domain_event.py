"""
Domain Event Base Class
All domain events inherit from this
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from src.shared.utils.dates import to_iso8601, utcnow


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    Events are immutable facts about something that already happened to an
    aggregate. Subclasses add their own payload fields and extend ``to_dict``.

    Attributes:
        event_id: Unique identifier for this event occurrence
        occurred_at: UTC timestamp when the event occurred
        aggregate_id: Opaque id of the aggregate that produced this event
        aggregate_type: Type name of the aggregate
        event_version: Schema version of this event type
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)
    aggregate_id: str = ""
    aggregate_type: str = ""
    event_version: int = 1

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "occurred_at": to_iso8601(self.occurred_at),
            "aggregate_id": self.aggregate_id or None,
            "aggregate_type": self.aggregate_type,
            "event_version": self.event_version,
        }
