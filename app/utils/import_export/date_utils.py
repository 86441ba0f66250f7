"""
Date utilities for diary import/export.

Entry dates travel through the codec as canonical ``YYYY-MM-DD`` strings.
These helpers normalize incoming date values to that form and convert it to
and from the user-configurable ``dateFormat`` pattern (built from the
``YYYY``, ``MM`` and ``DD`` tokens).
"""
import re
from datetime import date, datetime, timezone
from typing import Optional, Union, Any

from dateutil import parser as date_parser

CANONICAL_DATE_FORMAT = "YYYY-MM-DD"
DATE_TOKENS = ("YYYY", "MM", "DD")

# Characters treated as interchangeable date separators when matching
DATE_SEPARATORS = "-./"

_CANONICAL_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_TOKEN_RE = re.compile(r"YYYY|MM|DD")
_TOKEN_GROUPS = {"YYYY": r"(?P<year>[0-9]{4})", "MM": r"(?P<month>[0-9]{2})", "DD": r"(?P<day>[0-9]{2})"}

DateInput = Union[str, date, datetime]


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is in UTC timezone.

    Args:
        dt: Datetime object (may be naive or timezone-aware)

    Returns:
        Datetime in UTC timezone
    """
    if dt.tzinfo is None:
        # Naive datetime - assume it's already UTC
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def normalize_entry_date(value: Any) -> str:
    """
    Normalize an entry date to a canonical ``YYYY-MM-DD`` string.

    Accepts:
    - ``date`` objects
    - ``datetime`` objects (aware values are converted to UTC first)
    - ISO strings with or without a time part (``2024-01-15T10:00:00Z``)
    - Any other string python-dateutil understands

    Args:
        value: Date string, date or datetime

    Returns:
        Canonical date string

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return ensure_utc(value).date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date type: {type(value)}")

    candidate = value.strip()
    date_part = candidate.split("T", 1)[0].split(" ", 1)[0]
    if _CANONICAL_DATE_RE.match(date_part):
        # Reject impossible calendar dates such as 2024-02-30
        return date.fromisoformat(date_part).isoformat()

    try:
        parsed = date_parser.parse(candidate)
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Unable to parse date: {value}") from e
    if parsed.tzinfo is not None:
        parsed = ensure_utc(parsed)
    return parsed.date().isoformat()


def safe_normalize_entry_date(value: Any) -> Optional[str]:
    """
    Normalize an entry date, returning None if it cannot be interpreted.

    Args:
        value: Date to normalize (or None)

    Returns:
        Canonical date string, or None
    """
    if value is None:
        return None

    try:
        return normalize_entry_date(value)
    except ValueError:
        return None


def is_valid_date_format(pattern: Optional[str]) -> bool:
    """Check that a date pattern contains each of YYYY, MM and DD exactly once."""
    if not pattern:
        return False
    tokens = _TOKEN_RE.findall(pattern)
    return sorted(tokens) == sorted(DATE_TOKENS)


def format_date(value: DateInput, pattern: str = CANONICAL_DATE_FORMAT) -> str:
    """
    Format a date according to a ``YYYY``/``MM``/``DD`` pattern.

    Args:
        value: Date string, date or datetime
        pattern: Target pattern, e.g. ``DD/MM/YYYY``

    Returns:
        Formatted date string
    """
    year, month, day = normalize_entry_date(value).split("-")
    parts = {"YYYY": year, "MM": month, "DD": day}
    return _TOKEN_RE.sub(lambda m: parts[m.group(0)], pattern)


def date_pattern_regex(pattern: str = CANONICAL_DATE_FORMAT) -> str:
    """
    Build a regular expression fragment matching dates written in ``pattern``.

    Literal ``-``, ``.`` and ``/`` in the pattern accept any of the three, so a
    document written as ``2024/01/15`` still matches ``YYYY-MM-DD``. The
    fragment defines the named groups ``year``, ``month`` and ``day``.
    """
    fragments = []
    for piece in re.split(r"(YYYY|MM|DD)", pattern):
        if not piece:
            continue
        if piece in _TOKEN_GROUPS:
            fragments.append(_TOKEN_GROUPS[piece])
            continue
        for char in piece:
            if char in DATE_SEPARATORS:
                fragments.append(f"[{re.escape(DATE_SEPARATORS)}]")
            else:
                fragments.append(re.escape(char))
    return "".join(fragments)


def parse_date(date_str: str, pattern: str = CANONICAL_DATE_FORMAT) -> Optional[str]:
    """
    Parse a date written in ``pattern`` into a canonical ``YYYY-MM-DD`` string.

    Args:
        date_str: Date text, e.g. ``15/01/2024``
        pattern: Pattern the text was written in, e.g. ``DD/MM/YYYY``

    Returns:
        Canonical date string, or None if the text does not match the
        pattern or is not a real calendar date
    """
    match = re.fullmatch(date_pattern_regex(pattern), date_str.strip())
    if not match:
        return None
    try:
        return date(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
        ).isoformat()
    except ValueError:
        return None
