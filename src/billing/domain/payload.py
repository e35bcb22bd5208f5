# src/billing/domain/payload.py
"""Extract-or-default accessors over an untrusted backend payload."""

from __future__ import annotations

from datetime import datetime
from typing import Mapping

from src.shared.utils.dates import parse_iso8601


class PayloadReader:
    """
    Typed reads over a loosely-typed mapping.

    Every accessor resolves one key on its own and falls back to its default
    when the key is absent or holds the wrong shape; nothing here raises.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, object]) -> None:
        self._data = data

    def raw(self, key: str) -> object:
        return self._data.get(key)

    def string(self, key: str, default: str = "") -> str:
        value = self._data.get(key)
        return value if isinstance(value, str) else default

    def optional_string(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def flag(self, key: str, default: bool = False) -> bool:
        # bool only; 1/"true" are not accepted as True
        value = self._data.get(key)
        return value if isinstance(value, bool) else default

    def instant(self, key: str) -> datetime | None:
        return parse_iso8601(self._data.get(key))
