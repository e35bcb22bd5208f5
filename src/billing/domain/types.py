# src/billing/domain/types.py
"""Billing domain types: subscription status codes and payload aliases."""

from __future__ import annotations

from enum import Enum
from typing import Mapping

# Raw backend payload: string keys, heterogeneous values
Payload = Mapping[str, object]
JsonDict = dict[str, object]


class StatusCode(Enum):
    """
    Renewal state of a subscription. A subscription is in exactly one state.

    - TRIAL: free trial period
    - INTRODUCTORY_OFFER: "pay as you go" or "pay up front" introductory offer
    - PROMOTIONAL_OFFER: custom promotional offer
    - REGULAR: regular paid period
    - GRACE_PERIOD: custom grace period configured on the backend
    - REFUNDED: refunded by the store; treat as never purchased
    - EXPIRED: canceled by the user or unresolved billing issues
    """

    TRIAL = "trial"
    INTRODUCTORY_OFFER = "intro"
    PROMOTIONAL_OFFER = "promo"
    REGULAR = "regular"
    GRACE_PERIOD = "grace"
    REFUNDED = "refunded"
    EXPIRED = "expired"

    @property
    def token(self) -> str:
        return _STATUS_TO_TOKEN[self]

    @classmethod
    def from_token(cls, token: object) -> "StatusCode":
        """Resolve a wire token. Unknown, empty or non-string tokens resolve to EXPIRED."""
        if not isinstance(token, str):
            return _TOKEN_TABLE[UNKNOWN_TOKEN]
        return _TOKEN_TABLE.get(token, _TOKEN_TABLE[UNKNOWN_TOKEN])

    @staticmethod
    def to_token(status: "StatusCode") -> str:
        return _STATUS_TO_TOKEN[status]

    def __repr__(self) -> str:
        return f"StatusCode.{self.name}"


# Key of the fallback entry in the token table
UNKNOWN_TOKEN = ""

_STATUS_TO_TOKEN: dict[StatusCode, str] = {
    StatusCode.TRIAL: "trial",
    StatusCode.INTRODUCTORY_OFFER: "intro",
    StatusCode.PROMOTIONAL_OFFER: "promo",
    StatusCode.REGULAR: "regular",
    StatusCode.GRACE_PERIOD: "grace",
    StatusCode.REFUNDED: "refunded",
    StatusCode.EXPIRED: "expired",
}

_TOKEN_TABLE: dict[str, StatusCode] = {
    **{token: status for status, token in _STATUS_TO_TOKEN.items()},
    # Fail closed: anything we cannot name never grants access
    UNKNOWN_TOKEN: StatusCode.EXPIRED,
}
