"""Tests for date keys, date input and the availability index."""

from datetime import date, datetime

import pytest

from jobcloud.catalog.dates import (
    QUICK_DATES,
    build_availability_index,
    format_date_key,
    format_display_date,
    is_available,
    parse_date_input,
    quick_date,
    to_local_date,
)


class TestDateKeys:
    def test_key_is_zero_padded(self):
        assert format_date_key(date(2024, 3, 5)) == "2024-03-05"

    def test_naive_datetime_uses_its_calendar_date(self):
        assert format_date_key(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"

    def test_to_local_date_leaves_dates_alone(self):
        assert to_local_date(date(2024, 12, 31)) == date(2024, 12, 31)

    def test_display_date(self):
        assert format_display_date(date(2024, 3, 5)) == "05/03/2024"


class TestParseDateInput:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2024-03-05", date(2024, 3, 5)),
            (" 2024-3-5 ", date(2024, 3, 5)),
            ("2024-12-31", date(2024, 12, 31)),
        ],
    )
    def test_valid_input(self, text, expected):
        assert parse_date_input(text) == expected

    @pytest.mark.parametrize("text", [None, "", "2024-02-30", "2024-13-01", "05/03/2024", "soon"])
    def test_invalid_input_returns_none(self, text):
        assert parse_date_input(text) is None


class TestQuickDates:
    def test_offsets(self):
        assert QUICK_DATES == {"Today": 0, "Yesterday": 1, "2 Days Ago": 2}

    def test_quick_date_crosses_month_boundary(self):
        assert quick_date(2, today=date(2024, 3, 1)) == date(2024, 2, 28)

    def test_quick_date_today(self):
        assert quick_date(0, today=date(2024, 3, 5)) == date(2024, 3, 5)


class TestAvailabilityIndex:
    def test_duplicates_collapse(self):
        index = build_availability_index(["2024-03-05", "2024-03-05", "2024-03-04"])

        assert index == frozenset({"2024-03-05", "2024-03-04"})

    def test_blank_values_are_dropped(self):
        assert build_availability_index([None, "", "2024-03-05"]) == frozenset({"2024-03-05"})

    def test_empty_projection(self):
        assert build_availability_index([]) == frozenset()

    def test_is_available(self):
        index = build_availability_index(["2024-03-05"])

        assert is_available(index, date(2024, 3, 5))
        assert not is_available(index, date(2024, 3, 6))
