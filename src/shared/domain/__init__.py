"""
Shared Domain Layer
Pure domain contracts with no framework dependencies
"""
from src.shared.domain.domain_event import DomainEvent
from src.shared.domain.result import Failure, Result, Success

__all__ = [
    "DomainEvent",
    "Result",
    "Success",
    "Failure",
]
