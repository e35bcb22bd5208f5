from datetime import datetime, timedelta, timezone

import pytest

from src.shared.utils.dates import parse_iso8601, to_iso8601, utcnow


def test_parses_zulu_suffix():
    assert parse_iso8601("2030-01-01T00:00:00Z") == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_parses_fractional_seconds():
    assert parse_iso8601("2024-01-01T08:30:00.250Z") == datetime(2024, 1, 1, 8, 30, 0, 250000, tzinfo=timezone.utc)


def test_offset_is_converted_to_utc():
    parsed = parse_iso8601("2024-01-01T10:00:00+02:00")
    assert parsed == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_naive_timestamp_is_treated_as_utc():
    assert parse_iso8601("2024-01-01T08:00:00") == datetime(2024, 1, 1, 8, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "   ", "garbage", "2024-02-30T00:00:00Z", 1704067200, b"2024-01-01", object()])
def test_invalid_values_yield_none(value):
    assert parse_iso8601(value) is None


def test_to_iso8601_round_trip():
    value = datetime(2024, 6, 1, 9, 15, 30, tzinfo=timezone.utc)
    assert to_iso8601(value) == "2024-06-01T09:15:30Z"
    assert parse_iso8601(to_iso8601(value)) == value


def test_utcnow_is_aware():
    assert utcnow().tzinfo is timezone.utc


@pytest.mark.parametrize("value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:59:59-01:00"])
def test_out_of_range_after_utc_shift_yields_none(value):
    assert parse_iso8601(value) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2030-01-01T00:00:00.25Z", datetime(2030, 1, 1, 0, 0, 0, 250000, tzinfo=timezone.utc)),
        ("20300101T000000Z", datetime(2030, 1, 1, tzinfo=timezone.utc)),
    ],
)
def test_extended_iso_forms(value, expected):
    assert parse_iso8601(value) == expected
