"""
Unit tests for the diary text serializer.
"""
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.data_transfer.diary_text import DiaryEntry, serialize_entries
from app.data_transfer.diary_text.serializer import render_header, sort_entries
from app.data_transfer.diary_text.format_config import DEFAULT_FORMAT, resolve_format_config

ENTRY_SEPARATOR = "-" * 80
SAME_DAY_SEPARATOR = "*" * 80


class TestRenderHeader:
    """Test header line rendering."""

    def test_date_header_with_tags(self):
        assert render_header("2024-01-15", ["work", "personal"], DEFAULT_FORMAT) == "---2024-01-15--[work,personal]"

    def test_header_without_tags_keeps_brackets(self):
        assert render_header("2", [], DEFAULT_FORMAT) == "---2--[]"

    def test_custom_brackets_and_separator(self):
        config = resolve_format_config({"tagOpenBracket": "(", "tagCloseBracket": ")", "tagSeparator": ";"})

        assert render_header("2024-01-15", ["work", "personal"], config) == "---2024-01-15--(work;personal)"


class TestSortEntries:
    """Test entry ordering before rendering."""

    def test_orders_by_date_then_index(self, sample_entries):
        ordered = sort_entries(sample_entries)

        assert [(e.date, e.index) for e in ordered] == [
            ("2024-01-15", 1),
            ("2024-01-15", 2),
            ("2024-01-16", 1),
        ]

    def test_accepts_attribute_style_objects(self):
        row = SimpleNamespace(date=date(2024, 3, 1), index=1, tags=["a"], content="Row")

        ordered = sort_entries([row])

        assert ordered[0] == DiaryEntry(date="2024-03-01", index=1, tags=["a"], content="Row")


class TestSerializeEntries:
    """Test document rendering."""

    def test_single_entry(self):
        entries = [{"date": "2024-01-15", "index": 1, "tags": ["happy", "productive"], "content": "Test entry content"}]

        text = serialize_entries(entries)

        assert text == "---2024-01-15--[happy,productive]\n\nTest entry content\n\n" + ENTRY_SEPARATOR + "\n"

    def test_empty_input_renders_empty_string(self):
        assert serialize_entries([]) == ""

    def test_same_day_entries_use_index_headers(self, sample_entries, sample_document):
        assert serialize_entries(sample_entries) == sample_document

    def test_input_order_does_not_matter(self, sample_entries, sample_document):
        assert serialize_entries(list(reversed(sample_entries))) == sample_document

    def test_every_date_run_ends_with_entry_separator(self, sample_entries):
        lines = serialize_entries(sample_entries).split("\n")

        assert lines.count(ENTRY_SEPARATOR) == 2
        assert lines.count(SAME_DAY_SEPARATOR) == 1
        assert lines[-2] == ENTRY_SEPARATOR
        assert lines[-1] == ""

    def test_first_entry_of_day_carries_date_even_with_higher_index(self):
        entries = [{"date": "2024-01-15", "index": 3, "tags": [], "content": "Only one"}]

        assert serialize_entries(entries).startswith("---2024-01-15--[]\n")

    def test_missing_index_falls_back_to_position(self):
        entries = [
            {"date": "2024-01-15", "tags": [], "content": "First"},
            {"date": "2024-01-15", "tags": [], "content": "Second"},
        ]

        assert "---2--[]" in serialize_entries(entries).split("\n")

    def test_legacy_text_field_is_used_when_content_missing(self):
        entries = [{"date": "2024-01-15", "index": 1, "tags": [], "text": "Legacy body"}]

        assert "Legacy body" in serialize_entries(entries)

    def test_content_wins_over_text(self):
        entries = [{"date": "2024-01-15", "index": 1, "tags": [], "content": "New", "text": "Old"}]

        text = serialize_entries(entries)

        assert "New" in text
        assert "Old" not in text

    def test_missing_tags_render_empty_brackets(self):
        entries = [{"date": "2024-01-15", "index": 1, "content": "No tags"}]

        assert serialize_entries(entries).startswith("---2024-01-15--[]\n")

    def test_multiline_content_is_kept_verbatim(self):
        entries = [{"date": "2024-01-15", "index": 1, "tags": [], "content": "Line one\n\n  indented\r\nlast"}]

        lines = serialize_entries(entries).split("\n")

        assert lines[2:6] == ["Line one", "", "  indented", "last"]

    def test_crlf_newline(self):
        entries = [{"date": "2024-01-15", "index": 1, "tags": ["a"], "content": "Body"}]

        text = serialize_entries(entries, newline="\r\n")

        assert text == "---2024-01-15--[a]\r\n\r\nBody\r\n\r\n" + ENTRY_SEPARATOR + "\r\n"

    def test_custom_configuration(self):
        options = {
            "entrySeparator": "====",
            "sameDaySeparator": "~~~~",
            "datePrefix": "## ",
            "dateSuffix": " ",
            "dateFormat": "DD/MM/YYYY",
            "tagOpenBracket": "(",
            "tagCloseBracket": ")",
            "tagSeparator": ";",
        }
        entries = [
            {"date": "2024-01-15", "index": 1, "tags": ["work", "personal"], "content": "One"},
            {"date": "2024-01-15", "index": 2, "tags": [], "content": "Two"},
        ]

        text = serialize_entries(entries, options)

        assert text == (
            "## 15/01/2024 (work;personal)\n\nOne\n\n"
            "~~~~\n\n"
            "## 2 ()\n\nTwo\n\n"
            "====\n"
        )

    def test_date_objects_and_datetimes_are_normalized(self):
        eastern = timezone(timedelta(hours=-5))
        entries = [
            {"date": date(2024, 1, 15), "index": 1, "tags": [], "content": "Date object"},
            {"date": datetime(2024, 1, 15, 22, 30, tzinfo=eastern), "index": 1, "tags": [], "content": "Late evening"},
        ]

        text = serialize_entries(entries)

        # 22:30 at UTC-5 falls on the next UTC day
        assert "---2024-01-15--[]" in text
        assert "---2024-01-16--[]" in text

    def test_invalid_date_raises(self):
        with pytest.raises(ValueError):
            serialize_entries([{"date": "not a date", "index": 1, "content": "x"}])
