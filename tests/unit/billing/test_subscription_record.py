import json
from datetime import datetime, timezone

import pytest

from src.billing.domain.entities import SubscriptionRecord
from src.billing.domain.errors import InvariantViolation
from src.billing.domain.events import SubscriptionStatusChanged
from src.billing.domain.types import StatusCode

EXPIRES = datetime(2030, 1, 1, tzinfo=timezone.utc)
STARTED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_record(**overrides):
    fields = dict(
        id="sub_7f3a9c",
        product_id="pro.monthly",
        group_id="grp_premium",
        status=StatusCode.TRIAL,
        expires_date=EXPIRES,
        started_at=STARTED,
    )
    fields.update(overrides)
    return SubscriptionRecord(**fields)


def test_status_is_reassignable():
    record = make_record()
    record.status = StatusCode.REFUNDED
    assert record.status is StatusCode.REFUNDED
    assert record.is_active() is False


@pytest.mark.parametrize("value", ["trial", None, 0, "expired"])
def test_status_rejects_non_status_values(value):
    record = make_record()
    with pytest.raises(InvariantViolation):
        record.status = value
    assert record.status is StatusCode.TRIAL


@pytest.mark.parametrize(
    "name, value",
    [
        ("id", "other"),
        ("product_id", "other"),
        ("group_id", "other"),
        ("expires_date", STARTED),
        ("started_at", EXPIRES),
        ("canceled_at", STARTED),
        ("is_sandbox", True),
        ("is_local", True),
        ("is_in_retry_billing", True),
        ("is_autorenew_enabled", True),
        ("is_introductory_activated", True),
    ],
)
def test_other_fields_are_read_only(name, value):
    record = make_record()
    with pytest.raises(AttributeError):
        setattr(record, name, value)


def test_construction_requires_expiration():
    with pytest.raises(InvariantViolation) as exc:
        make_record(expires_date=None)
    assert exc.value.details == {"field": "expires_date"}


@pytest.mark.parametrize(
    "overrides",
    [
        {"status": "regular"},
        {"id": None},
        {"product_id": 5},
        {"is_sandbox": "sandbox"},
        {"is_local": 1},
        {"started_at": "2024-01-01"},
        {"canceled_at": "2024-01-01"},
    ],
)
def test_construction_rejects_out_of_range_values(overrides):
    with pytest.raises(InvariantViolation):
        make_record(**overrides)


def test_apply_status_records_event():
    record = make_record(status=StatusCode.REGULAR)

    changed = record.apply_status(StatusCode.REFUNDED, reason="refund_notification")

    assert changed is True
    assert record.status is StatusCode.REFUNDED
    events = record.collect_events()
    assert len(events) == 1
    event = events[0]
    assert isinstance(event, SubscriptionStatusChanged)
    assert event.subscription_id == "sub_7f3a9c"
    assert event.previous_status is StatusCode.REGULAR
    assert event.new_status is StatusCode.REFUNDED
    assert event.previous_active is True
    assert event.new_active is False
    assert event.entitlement_changed is True
    assert event.reason == "refund_notification"
    assert record.collect_events() == []


def test_apply_same_status_is_a_no_op():
    record = make_record(status=StatusCode.GRACE_PERIOD)
    assert record.apply_status(StatusCode.GRACE_PERIOD) is False
    assert record.collect_events() == []


def test_apply_status_between_active_states_keeps_entitlement():
    record = make_record(status=StatusCode.TRIAL)
    record.apply_status(StatusCode.REGULAR, reason="renewal")
    (event,) = record.collect_events()
    assert event.entitlement_changed is False


def test_apply_status_rejects_tokens():
    record = make_record()
    with pytest.raises(InvariantViolation):
        record.apply_status("expired")
    assert record.collect_events() == []


def test_status_event_to_dict():
    record = make_record(status=StatusCode.GRACE_PERIOD)
    record.apply_status(StatusCode.EXPIRED)
    data = record.collect_events()[0].to_dict()
    assert data["event_type"] == "SubscriptionStatusChanged"
    assert data["aggregate_id"] == "sub_7f3a9c"
    assert data["aggregate_type"] == "SubscriptionRecord"
    assert data["previous_status"] == "grace"
    assert data["new_status"] == "expired"
    assert data["occurred_at"].endswith("Z")


def test_pending_events_do_not_affect_equality():
    a = make_record(status=StatusCode.REGULAR)
    b = make_record(status=StatusCode.EXPIRED)
    a.apply_status(StatusCode.EXPIRED)
    assert a == b
    assert "_pending_events" not in repr(a)


def test_to_payload_parses_back_to_equal_record():
    record = make_record(
        status=StatusCode.PROMOTIONAL_OFFER,
        canceled_at=datetime(2024, 6, 1, 9, 15, tzinfo=timezone.utc),
        is_sandbox=True,
        is_in_retry_billing=True,
        is_introductory_activated=True,
    )
    payload = record.to_payload()

    assert payload["status"] == "promo"
    assert payload["environment"] == "sandbox"
    assert payload["expires_at"] == "2030-01-01T00:00:00Z"
    assert payload["cancelled_at"] == "2024-06-01T09:15:00Z"
    assert SubscriptionRecord.from_payload(payload) == record


def test_to_payload_production_without_cancellation():
    payload = make_record().to_payload()
    assert payload["environment"] == "production"
    assert payload["cancelled_at"] is None


def test_to_json_is_stable():
    record = make_record(status=StatusCode.INTRODUCTORY_OFFER)
    text = record.to_json()
    assert json.loads(text) == record.to_payload()
    assert text == make_record(status=StatusCode.INTRODUCTORY_OFFER).to_json()
