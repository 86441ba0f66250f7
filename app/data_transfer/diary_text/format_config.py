"""
Format configuration for the diary text codec.

A ``FormatConfig`` holds the eight delimiter/pattern options that control
both serialization and parsing. Callers usually supply a sparse mapping
(e.g. the options a user saved in their settings); ``resolve_format_config``
fills the gaps from ``DEFAULT_FORMAT``.
"""
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.utils.import_export.date_utils import CANONICAL_DATE_FORMAT, is_valid_date_format

SEPARATOR_WIDTH = 80


class FormatConfig(BaseModel):
    """Complete, immutable set of formatting options."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    entry_separator: str
    same_day_separator: str
    date_prefix: str
    date_suffix: str
    date_format: str
    tag_open_bracket: str
    tag_close_bracket: str
    tag_separator: str

    def to_options(self) -> Dict[str, str]:
        """Return the options keyed by their camelCase names."""
        return self.model_dump(by_alias=True)


DEFAULT_FORMAT = FormatConfig(
    entry_separator="-" * SEPARATOR_WIDTH,
    same_day_separator="*" * SEPARATOR_WIDTH,
    date_prefix="---",
    date_suffix="--",
    date_format=CANONICAL_DATE_FORMAT,
    tag_open_bracket="[",
    tag_close_bracket="]",
    tag_separator=",",
)

# Options that cannot be empty: a blank separator never delimits a block
_NON_EMPTY_OPTIONS = ("entry_separator", "same_day_separator", "date_format")

FormatOptions = Union[FormatConfig, Mapping, None]


def _lookup(partial: Mapping, field_name: str) -> Any:
    """Find an option by its snake_case or camelCase key."""
    value = partial.get(field_name)
    if value is None:
        value = partial.get(to_camel(field_name))
    return value


def resolve_format_config(partial: FormatOptions = None) -> FormatConfig:
    """
    Merge a possibly partial set of options with the defaults.

    Missing keys and ``None`` values take the default. An explicit empty
    string is kept for the prefix, suffix, brackets and tag separator, but
    the two separators and the date format fall back to their defaults when
    blank. A date format missing any of ``YYYY``, ``MM`` or ``DD`` also
    falls back. Unknown keys are ignored. Never raises.

    Args:
        partial: Options keyed by camelCase or snake_case names, or an
            existing ``FormatConfig``

    Returns:
        Fully populated ``FormatConfig``
    """
    if partial is None:
        return DEFAULT_FORMAT
    if isinstance(partial, FormatConfig):
        partial = partial.model_dump()
    if not isinstance(partial, Mapping):
        return DEFAULT_FORMAT

    resolved: Dict[str, str] = {}
    for field_name, default in DEFAULT_FORMAT.model_dump().items():
        value = _lookup(partial, field_name)
        if value is None:
            resolved[field_name] = default
            continue

        value = str(value)
        if field_name in _NON_EMPTY_OPTIONS and not value.strip():
            value = default
        if field_name == "date_format" and not is_valid_date_format(value):
            value = default
        resolved[field_name] = value

    return FormatConfig(**resolved)
