"""
Unit tests for diary date helpers.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from app.utils.import_export.date_utils import (
    ensure_utc,
    format_date,
    is_valid_date_format,
    normalize_entry_date,
    parse_date,
    safe_normalize_entry_date,
)


class TestEnsureUtc:
    def test_naive_datetime_is_assumed_utc(self):
        assert ensure_utc(datetime(2024, 1, 15, 12, 0)).tzinfo == timezone.utc

    def test_aware_datetime_is_converted(self):
        value = datetime(2024, 1, 15, 20, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert ensure_utc(value) == datetime(2024, 1, 16, 1, 0, tzinfo=timezone.utc)


class TestNormalizeEntryDate:
    """Test conversion of incoming dates to YYYY-MM-DD."""

    @pytest.mark.parametrize("value,expected", [
        ("2024-01-15", "2024-01-15"),
        ("  2024-01-15  ", "2024-01-15"),
        ("2024-01-15T08:30:00Z", "2024-01-15"),
        ("2024-01-15 08:30:00", "2024-01-15"),
        (date(2024, 1, 15), "2024-01-15"),
        (datetime(2024, 1, 15, 8, 30), "2024-01-15"),
        ("January 15, 2024", "2024-01-15"),
    ])
    def test_supported_values(self, value, expected):
        assert normalize_entry_date(value) == expected

    def test_aware_datetime_uses_utc_date(self):
        value = datetime(2024, 1, 15, 23, 0, tzinfo=timezone(timedelta(hours=-3)))

        assert normalize_entry_date(value) == "2024-01-16"

    @pytest.mark.parametrize("value", ["2024-02-30", "not a date", "", 20240115, None])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ValueError):
            normalize_entry_date(value)

    def test_safe_variant_returns_none(self):
        assert safe_normalize_entry_date(None) is None
        assert safe_normalize_entry_date("2024-02-30") is None
        assert safe_normalize_entry_date("2024-02-29") == "2024-02-29"


class TestDateFormats:
    """Test rendering and matching of YYYY/MM/DD patterns."""

    @pytest.mark.parametrize("pattern,valid", [
        ("YYYY-MM-DD", True),
        ("DD/MM/YYYY", True),
        ("YYYYMMDD", True),
        ("YYYY-MM", False),
        ("YYYY-MM-DD DD", False),
        ("", False),
        (None, False),
    ])
    def test_is_valid_date_format(self, pattern, valid):
        assert is_valid_date_format(pattern) is valid

    @pytest.mark.parametrize("pattern,expected", [
        ("YYYY-MM-DD", "2024-01-05"),
        ("DD/MM/YYYY", "05/01/2024"),
        ("MM.DD.YYYY", "01.05.2024"),
        ("YYYYMMDD", "20240105"),
    ])
    def test_format_date(self, pattern, expected):
        assert format_date("2024-01-05", pattern) == expected

    def test_format_date_accepts_date_objects(self):
        assert format_date(date(2024, 1, 5)) == "2024-01-05"

    @pytest.mark.parametrize("text,pattern", [
        ("2024-01-05", "YYYY-MM-DD"),
        ("2024/01/05", "YYYY-MM-DD"),
        ("2024.01.05", "YYYY-MM-DD"),
        ("05/01/2024", "DD/MM/YYYY"),
        ("05-01-2024", "DD/MM/YYYY"),
        ("20240105", "YYYYMMDD"),
    ])
    def test_parse_date(self, text, pattern):
        assert parse_date(text, pattern) == "2024-01-05"

    @pytest.mark.parametrize("text", [
        "2024-1-5", "2024-01-32", "2023-02-29", "05/01/2024", "2024_01_05",
        "\u0662\u0660\u0662\u0664-\u0660\u0661-\u0660\u0665",
    ])
    def test_parse_date_rejects(self, text):
        assert parse_date(text, "YYYY-MM-DD") is None
