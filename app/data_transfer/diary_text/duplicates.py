"""
Duplicate detection between an imported batch and previously stored entries.
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.data_transfer.diary_text.models import DuplicatePair, get_entry_field
from app.utils.import_export.date_utils import safe_normalize_entry_date

DuplicateKey = Tuple[str, str]


def duplicate_key(entry: Any) -> Optional[DuplicateKey]:
    """
    Comparison key ``(canonical date, trimmed content)`` for an entry.

    Returns None for entries that can never match: missing content or a
    date that cannot be normalized.
    """
    content = get_entry_field(entry, "content")
    if content is None:
        return None
    entry_date = safe_normalize_entry_date(get_entry_field(entry, "date"))
    if entry_date is None:
        return None
    return entry_date, str(content).strip()


def find_duplicates(imported: Iterable[Any], existing: Iterable[Any]) -> List[DuplicatePair]:
    """
    Report imported entries whose date and trimmed content match an existing entry.

    An imported entry matching several existing entries is reported once per
    match, in the order of the existing collection.

    Args:
        imported: Freshly parsed entries
        existing: Previously stored entries (mappings or attribute-style objects)

    Returns:
        ``DuplicatePair`` list in imported order
    """
    existing_by_key: Dict[DuplicateKey, List[Any]] = defaultdict(list)
    for entry in existing:
        key = duplicate_key(entry)
        if key is not None:
            existing_by_key[key].append(entry)

    duplicates: List[DuplicatePair] = []
    if not existing_by_key:
        return duplicates

    for entry in imported:
        key = duplicate_key(entry)
        if key is None:
            continue
        for match in existing_by_key.get(key, ()):
            duplicates.append(DuplicatePair(imported=entry, existing=match))

    return duplicates
