"""
Diary text parser.

Parsing runs as independent passes:

1. ``normalize_line_endings`` turns ``\\r\\n`` and bare ``\\r`` into ``\\n``.
2. ``split_blocks`` cuts the text at separator lines.
3. ``parse_block`` reads each block's header and content.
4. ``parse_text`` walks the blocks with a per-date-run state, assigning
   dates to continuation blocks and indices to every entry.

Malformed blocks never raise; they are logged and left out of the result.
"""
import re
from functools import lru_cache
from typing import List, Optional, Pattern, Tuple

from app.core.logging_config import log_debug
from app.data_transfer.diary_text.format_config import FormatConfig, FormatOptions, resolve_format_config
from app.data_transfer.diary_text.models import DateHeader, Header, IndexHeader, ParsedEntry
from app.utils.import_export.date_utils import date_pattern_regex, parse_date

BYTE_ORDER_MARK = "\ufeff"


def normalize_line_endings(text: str) -> str:
    """
    Convert Windows and classic Mac line endings to ``\\n``.

    A leading byte-order mark, as written by some Windows editors, is dropped.
    """
    text = text.removeprefix(BYTE_ORDER_MARK)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_blocks(text: str, config: FormatOptions = None) -> List[List[str]]:
    """
    Split normalized text into blocks of lines.

    A line whose stripped value equals either separator ends the current
    block and is discarded. Blocks holding only blank lines are dropped.
    """
    config = resolve_format_config(config)
    separators = {config.entry_separator.strip(), config.same_day_separator.strip()}

    blocks: List[List[str]] = []
    current: List[str] = []
    for line in text.split("\n"):
        if line.strip() in separators:
            if any(l.strip() for l in current):
                blocks.append(current)
            current = []
            continue
        current.append(line)

    if any(l.strip() for l in current):
        blocks.append(current)
    return blocks


@lru_cache(maxsize=32)
def _header_patterns(config: FormatConfig) -> Tuple[Pattern, Pattern]:
    prefix = re.escape(config.date_prefix)
    suffix = re.escape(config.date_suffix)
    tag_open = re.escape(config.tag_open_bracket)
    tag_close = re.escape(config.tag_close_bracket)
    tail = f"{suffix}{tag_open}(?P<tags>.*){tag_close}$"

    date_re = re.compile(f"^{prefix}(?P<token>{date_pattern_regex(config.date_format)}){tail}")
    index_re = re.compile(f"^{prefix}(?P<token>[0-9]+){tail}")
    return date_re, index_re


def split_tags(tag_list: str, config: FormatConfig) -> List[str]:
    """Split a header's tag list, trimming tags and dropping empty ones."""
    if not config.tag_separator:
        parts = [tag_list]
    else:
        parts = tag_list.split(config.tag_separator)
    return [tag.strip() for tag in parts if tag.strip()]


def parse_header(line: str, config: FormatOptions = None) -> Optional[Header]:
    """
    Recognise a block header.

    Returns:
        ``DateHeader`` for a date token, ``IndexHeader`` for a positive
        integer token, or None when the line does not match the grammar
    """
    config = resolve_format_config(config)
    date_re, index_re = _header_patterns(config)
    candidate = line.strip()

    match = date_re.match(candidate)
    if match:
        entry_date = parse_date(match.group("token"), config.date_format)
        if entry_date is None:
            return None
        return DateHeader(date=entry_date, tags=split_tags(match.group("tags"), config))

    match = index_re.match(candidate)
    if match:
        index = int(match.group("token"))
        if index < 1:
            return None
        return IndexHeader(index=index, tags=split_tags(match.group("tags"), config))

    return None


def extract_content(lines: List[str]) -> str:
    """Join content lines, dropping leading and trailing blank lines."""
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


def parse_block(lines: List[str], config: FormatOptions = None) -> Optional[Tuple[Header, str]]:
    """
    Parse one block into its header and content.

    The first non-blank line is the header; everything after it is content.

    Returns:
        ``(header, content)``, or None when the header is not recognised
    """
    config = resolve_format_config(config)
    for position, line in enumerate(lines):
        if not line.strip():
            continue
        header = parse_header(line, config)
        if header is None:
            return None
        return header, extract_content(lines[position + 1:])
    return None


class DateRunState:
    """Running position inside the current date-run."""

    def __init__(self):
        self.current_date: Optional[str] = None
        self.next_index = 1

    def start_run(self, entry_date: str):
        self.current_date = entry_date
        self.next_index = 1


def parse_text(text: str, config: FormatOptions = None, *, renumber: bool = False) -> List[ParsedEntry]:
    """
    Parse a diary text document into entries.

    A date header starts a new date-run at index 1. An index header
    continues the current run and, by default, its explicit number is
    trusted as the entry's index. With ``renumber=True`` continuation
    numbers are ignored and entries get sequential positions within their
    run instead.

    Blocks without a recognised header, index headers seen before any date
    header, and blocks with blank content are skipped.

    Args:
        text: Document text
        config: Format options (partial mapping or ``FormatConfig``)
        renumber: Recompute continuation indices from document order

    Returns:
        Entries in document order
    """
    if not isinstance(text, str) or not text:
        return []

    config = resolve_format_config(config)
    state = DateRunState()
    entries: List[ParsedEntry] = []

    for block_number, block in enumerate(split_blocks(normalize_line_endings(text), config), start=1):
        parsed = parse_block(block, config)
        if parsed is None:
            log_debug("Skipping diary block without a valid header", block=block_number)
            continue

        header, content = parsed
        if isinstance(header, DateHeader):
            state.start_run(header.date)
            index = 1
        elif state.current_date is None:
            log_debug("Skipping continuation block before any date header", block=block_number)
            continue
        else:
            index = state.next_index if renumber else header.index

        if not content.strip():
            log_debug("Skipping diary block with empty content", block=block_number, date=state.current_date)
            continue

        entries.append(ParsedEntry(
            date=state.current_date,
            index=index,
            tags=header.tags,
            content=content,
        ))
        state.next_index = index + 1

    log_debug("Parsed diary text", entry_count=len(entries))
    return entries
