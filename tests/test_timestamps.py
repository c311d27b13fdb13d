"""Tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from jobcloud.utils.timestamps import ensure_utc, format_timestamp, parse_iso_datetime, utc_now


def test_utc_now_is_aware():
    now = utc_now()

    assert now.tzinfo == timezone.utc


def test_ensure_utc_none():
    assert ensure_utc(None) is None


def test_ensure_utc_converts_offsets():
    ist = timezone(timedelta(hours=5, minutes=30))
    dt = datetime(2024, 3, 5, 12, 0, tzinfo=ist)

    assert ensure_utc(dt) == datetime(2024, 3, 5, 6, 30, tzinfo=timezone.utc)


class TestParseIsoDatetime:
    def test_z_suffix(self):
        assert parse_iso_datetime("2024-03-05T09:15:00Z") == datetime(
            2024, 3, 5, 9, 15, tzinfo=timezone.utc
        )

    def test_naive_string_is_utc(self):
        assert parse_iso_datetime("2024-03-05T09:15:00").tzinfo == timezone.utc

    def test_date_only(self):
        assert parse_iso_datetime("2024-03-05") == datetime(2024, 3, 5, tzinfo=timezone.utc)

    def test_blank_and_invalid(self):
        assert parse_iso_datetime(None) is None
        assert parse_iso_datetime("   ") is None
        assert parse_iso_datetime("not a date") is None


class TestFormatTimestamp:
    def test_with_microseconds(self):
        dt = datetime(2024, 3, 5, 9, 15, 0, 123456, tzinfo=timezone.utc)

        assert format_timestamp(dt) == "2024-03-05T09:15:00.123456Z"

    def test_without_microseconds(self):
        dt = datetime(2024, 3, 5, 9, 15, tzinfo=timezone.utc)

        assert format_timestamp(dt, include_microseconds=False) == "2024-03-05T09:15:00Z"

    def test_none(self):
        assert format_timestamp(None) is None

    def test_round_trip_keeps_order(self):
        earlier = datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc)
        later = earlier + timedelta(seconds=1)

        assert format_timestamp(earlier) < format_timestamp(later)
