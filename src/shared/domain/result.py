"""
Result type for domain operations that can fail without raising.

A parse or validation step returns ``Success(value)`` or ``Failure(error)``;
callers branch on ``is_success()`` or collapse with ``or_else``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """
    Successful outcome.

    Attributes:
        value: The produced value
    """

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, func: Callable[[T], U]) -> "Success[U]":
        """Transform the carried value."""
        return Success(func(self.value))

    def flat_map(self, func: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        """Chain another step that itself returns a Result."""
        return func(self.value)

    def or_else(self, default: T) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """
    Failed outcome.

    Attributes:
        error: Why the operation failed
    """

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, func: Callable[..., object]) -> "Failure[E]":
        return self

    def flat_map(self, func: Callable[..., object]) -> "Failure[E]":
        return self

    def or_else(self, default: T) -> T:
        return default

    def unwrap(self):
        """
        Raises:
            ValueError: always; a Failure carries no value
        """
        raise ValueError(f"Attempted to unwrap a Failure: {self.error}")


Result = Union[Success[T], Failure[E]]
