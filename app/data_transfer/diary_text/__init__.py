"""
Plain-text diary interchange.

Serializes journal entries into a portable text document and parses such
documents back, flagging entries that already exist.
"""
from .codec import export_document, import_document
from .duplicates import find_duplicates
from .format_config import DEFAULT_FORMAT, FormatConfig, resolve_format_config
from .models import DiaryEntry, ParsedEntry, DateHeader, IndexHeader, DuplicatePair, ImportResult
from .parser import normalize_line_endings, split_blocks, parse_header, parse_text
from .serializer import serialize_entries

__all__ = [
    "export_document",
    "import_document",
    "find_duplicates",
    "DEFAULT_FORMAT",
    "FormatConfig",
    "resolve_format_config",
    "DiaryEntry",
    "ParsedEntry",
    "DateHeader",
    "IndexHeader",
    "DuplicatePair",
    "ImportResult",
    "normalize_line_endings",
    "split_blocks",
    "parse_header",
    "parse_text",
    "serialize_entries",
]
