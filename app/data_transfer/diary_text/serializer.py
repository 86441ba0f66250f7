"""
Diary text serializer.

Renders entries into a single plain-text document::

    ---2024-01-15--[work,personal]

    First entry of the day.

    ********************************************************************************

    ---2--[personal]

    Second entry of the day.

    --------------------------------------------------------------------------------

The first entry of each date-run carries the date in its header; later
entries of the same run carry their per-day index instead.
"""
from itertools import groupby
from typing import Any, Iterable, List

from app.data_transfer.diary_text.format_config import FormatConfig, FormatOptions, resolve_format_config
from app.data_transfer.diary_text.models import DiaryEntry
from app.data_transfer.diary_text.parser import normalize_line_endings
from app.utils.import_export.date_utils import format_date


def _to_diary_entry(entry: Any) -> DiaryEntry:
    if isinstance(entry, DiaryEntry):
        return entry
    return DiaryEntry.model_validate(entry, from_attributes=True)


def sort_entries(entries: Iterable[Any]) -> List[DiaryEntry]:
    """Coerce entries and order them by date, then by per-day index."""
    diary_entries = [_to_diary_entry(entry) for entry in entries]
    return sorted(diary_entries, key=lambda e: (e.date, e.index or 0))


def render_header(token: str, tags: List[str], config: FormatConfig) -> str:
    """Render a header line for a date or index token."""
    tag_list = config.tag_separator.join(tags)
    return (
        f"{config.date_prefix}{token}{config.date_suffix}"
        f"{config.tag_open_bracket}{tag_list}{config.tag_close_bracket}"
    )


def serialize_entries(entries: Iterable[Any], config: FormatOptions = None, newline: str = "\n") -> str:
    """
    Serialize entries into a diary text document.

    Indices are taken from the entries as given; callers are expected to
    supply contiguous per-date indices.

    Args:
        entries: ``DiaryEntry`` objects, mappings, or attribute-style objects
        config: Format options (partial mapping or ``FormatConfig``)
        newline: Line terminator for the output

    Returns:
        The document text, or an empty string when there are no entries

    Raises:
        ValueError: If an entry cannot be interpreted (e.g. an invalid date)
    """
    config = resolve_format_config(config)
    ordered = sort_entries(entries)
    if not ordered:
        return ""

    lines: List[str] = []
    for entry_date, run in groupby(ordered, key=lambda e: e.date):
        run = list(run)
        for position, entry in enumerate(run):
            if position == 0:
                token = format_date(entry_date, config.date_format)
            else:
                lines.extend([config.same_day_separator, ""])
                token = str(entry.index if entry.index is not None else position + 1)

            lines.extend([render_header(token, entry.tags, config), ""])
            lines.extend(normalize_line_endings(entry.body).split("\n"))
            lines.append("")

        lines.append(config.entry_separator)
        lines.append("")

    # Drop the blank line after the final separator; the join's trailing
    # terminator ends the document
    lines.pop()
    return newline.join(lines) + newline
