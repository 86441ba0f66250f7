"""
Import/Export utility modules.
"""
from .date_utils import (
    ensure_utc,
    normalize_entry_date,
    safe_normalize_entry_date,
    format_date,
    parse_date,
)

__all__ = [
    "ensure_utc",
    "normalize_entry_date",
    "safe_normalize_entry_date",
    "format_date",
    "parse_date",
]
