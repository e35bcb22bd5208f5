from datetime import datetime, timezone

import pytest
import structlog

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def full_payload():
    return {
        "id": "sub_7f3a9c",
        "product_id": "com.example.premium.monthly",
        "group_id": "grp_premium",
        "status": "regular",
        "expires_at": "2030-01-01T00:00:00Z",
        "started_at": "2024-01-01T08:30:00.000Z",
        "cancelled_at": None,
        "environment": "production",
        "in_retry_billing": False,
        "autorenew_enabled": True,
        "introductory_activated": True,
        "local": False,
    }


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
