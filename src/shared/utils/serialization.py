# /src/shared/utils/serialization.py
"""
Safe JSON helpers with support for datetime, Enum, UUID, Decimal.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from src.shared.utils.dates import to_iso8601


class SafeEncoder(json.JSONEncoder):
    def default(self, o: Any):
        if isinstance(o, datetime):
            return to_iso8601(o)
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, Decimal):
            return float(o)
        return super().default(o)


def dumps(data: Any, *, sort_keys: bool = False) -> str:
    return json.dumps(data, separators=(",", ":"), sort_keys=sort_keys, cls=SafeEncoder)


def loads(s: str) -> Any:
    return json.loads(s)
