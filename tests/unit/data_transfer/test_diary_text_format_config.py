"""
Unit tests for diary text format configuration.
"""
import pytest
from pydantic import ValidationError

from app.data_transfer.diary_text.format_config import (
    DEFAULT_FORMAT,
    FormatConfig,
    resolve_format_config,
)


class TestDefaultFormat:
    """Test the built-in grammar."""

    def test_default_values(self):
        assert DEFAULT_FORMAT.entry_separator == "-" * 80
        assert DEFAULT_FORMAT.same_day_separator == "*" * 80
        assert DEFAULT_FORMAT.date_prefix == "---"
        assert DEFAULT_FORMAT.date_suffix == "--"
        assert DEFAULT_FORMAT.date_format == "YYYY-MM-DD"
        assert DEFAULT_FORMAT.tag_open_bracket == "["
        assert DEFAULT_FORMAT.tag_close_bracket == "]"
        assert DEFAULT_FORMAT.tag_separator == ","

    def test_default_is_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_FORMAT.date_prefix = "###"

    def test_to_options_uses_camel_case_keys(self):
        options = DEFAULT_FORMAT.to_options()

        assert set(options) == {
            "entrySeparator", "sameDaySeparator", "datePrefix", "dateSuffix",
            "dateFormat", "tagOpenBracket", "tagCloseBracket", "tagSeparator",
        }
        assert options["datePrefix"] == "---"


class TestResolveFormatConfig:
    """Test merging partial options with defaults."""

    def test_none_returns_defaults(self):
        assert resolve_format_config() == DEFAULT_FORMAT
        assert resolve_format_config(None) == DEFAULT_FORMAT

    def test_empty_mapping_returns_defaults(self):
        assert resolve_format_config({}) == DEFAULT_FORMAT

    def test_partial_camel_case_options_are_merged(self):
        config = resolve_format_config({"entrySeparator": "====", "dateFormat": "DD-MM-YYYY"})

        assert config.entry_separator == "===="
        assert config.date_format == "DD-MM-YYYY"
        assert config.same_day_separator == DEFAULT_FORMAT.same_day_separator
        assert config.tag_open_bracket == DEFAULT_FORMAT.tag_open_bracket

    def test_snake_case_options_are_accepted(self):
        config = resolve_format_config({"tag_separator": ";", "date_prefix": "#"})

        assert config.tag_separator == ";"
        assert config.date_prefix == "#"

    def test_none_values_fall_back_to_defaults(self):
        config = resolve_format_config({"datePrefix": None, "tagSeparator": None})

        assert config == DEFAULT_FORMAT

    def test_empty_prefix_and_suffix_are_kept(self):
        config = resolve_format_config({"datePrefix": "", "dateSuffix": ""})

        assert config.date_prefix == ""
        assert config.date_suffix == ""

    def test_empty_brackets_and_tag_separator_are_kept(self):
        config = resolve_format_config({"tagOpenBracket": "", "tagCloseBracket": "", "tagSeparator": ""})

        assert config.tag_open_bracket == ""
        assert config.tag_close_bracket == ""
        assert config.tag_separator == ""

    def test_blank_separators_fall_back_to_defaults(self):
        config = resolve_format_config({"entrySeparator": "", "sameDaySeparator": "   "})

        assert config.entry_separator == DEFAULT_FORMAT.entry_separator
        assert config.same_day_separator == DEFAULT_FORMAT.same_day_separator

    def test_date_format_without_all_tokens_falls_back(self):
        assert resolve_format_config({"dateFormat": ""}).date_format == "YYYY-MM-DD"
        assert resolve_format_config({"dateFormat": "YYYY-MM"}).date_format == "YYYY-MM-DD"
        assert resolve_format_config({"dateFormat": "YYYY-MM-DD-DD"}).date_format == "YYYY-MM-DD"

    def test_custom_date_format_is_kept(self):
        assert resolve_format_config({"dateFormat": "DD/MM/YYYY"}).date_format == "DD/MM/YYYY"

    def test_unknown_keys_are_ignored(self):
        config = resolve_format_config({"theme": "dark", "tagSeparator": "|"})

        assert config.tag_separator == "|"
        assert not hasattr(config, "theme")

    def test_non_string_values_are_coerced(self):
        config = resolve_format_config({"datePrefix": 7})

        assert config.date_prefix == "7"

    def test_existing_config_is_accepted(self):
        config = resolve_format_config({"tagSeparator": ";"})

        assert resolve_format_config(config) == config

    @pytest.mark.parametrize("partial", [
        None,
        {},
        {"datePrefix": ""},
        {"entrySeparator": "", "dateFormat": "MM"},
        {"tagOpenBracket": "(", "tagCloseBracket": ")", "tagSeparator": ";"},
        {"date_format": "DD.MM.YYYY", "unknown": "x"},
    ])
    def test_resolution_is_idempotent(self, partial):
        once = resolve_format_config(partial)

        assert resolve_format_config(once) == once
        assert resolve_format_config(once.to_options()) == once

    def test_config_can_be_built_from_camel_case(self):
        config = FormatConfig(**DEFAULT_FORMAT.to_options())

        assert config == DEFAULT_FORMAT
