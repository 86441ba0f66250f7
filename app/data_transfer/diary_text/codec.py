"""
Diary text codec entry points.

``export_document`` and ``import_document`` tie the format configuration,
serializer, parser and duplicate detector together for callers such as the
import/export service.
"""
from typing import Any, Iterable

from app.data_transfer.diary_text.duplicates import find_duplicates
from app.data_transfer.diary_text.format_config import FormatOptions, resolve_format_config
from app.data_transfer.diary_text.models import ImportResult
from app.data_transfer.diary_text.parser import parse_text
from app.data_transfer.diary_text.serializer import serialize_entries


def export_document(entries: Iterable[Any], options: FormatOptions = None, newline: str = "\n") -> str:
    """Render entries as a diary text document."""
    return serialize_entries(entries, resolve_format_config(options), newline=newline)


def import_document(
    text: str,
    options: FormatOptions = None,
    existing: Iterable[Any] = (),
    renumber: bool = False,
) -> ImportResult:
    """
    Parse a diary text document and flag entries that already exist.

    Args:
        text: Uploaded document text
        options: Format options (partial mapping or ``FormatConfig``)
        existing: Previously stored entries to check for duplicates
        renumber: Recompute continuation indices from document order

    Returns:
        ``ImportResult`` with parsed entries and duplicate pairs
    """
    config = resolve_format_config(options)
    entries = parse_text(text, config, renumber=renumber)
    duplicates = find_duplicates(entries, existing)
    return ImportResult(entries=entries, duplicates=duplicates)
