"""
Diary text interchange models.

These models describe entries as they flow through the plain-text diary
codec: entries handed to the serializer, entries produced by the parser,
the two header variants recognised by the parser, and duplicate reports.
"""
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.import_export.date_utils import normalize_entry_date


def get_entry_field(entry: Any, name: str, default: Any = None) -> Any:
    """Read a field from a mapping or an attribute-style object (e.g. an ORM row)."""
    if isinstance(entry, Mapping):
        return entry.get(name, default)
    return getattr(entry, name, default)


class DiaryEntry(BaseModel):
    """
    A journal entry handed to the serializer.

    ``date`` accepts strings, ``date`` and ``datetime`` values and is stored
    as a canonical ``YYYY-MM-DD`` string.
    """
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    date: str = Field(..., description="Canonical YYYY-MM-DD date")
    index: Optional[int] = Field(None, ge=1, description="1-based position among entries of the same date")
    tags: List[str] = Field(default_factory=list, description="Ordered tag names")
    content: Optional[str] = Field(None, description="Entry text, may span lines")
    text: Optional[str] = Field(None, description="Legacy name for content")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> str:
        return normalize_entry_date(v)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> List[str]:
        """Accept None and any iterable of tag values."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(tag) for tag in v]

    @property
    def body(self) -> str:
        """Text to render; ``content`` wins over the legacy ``text`` field."""
        if self.content is not None:
            return self.content
        return self.text or ""


class ParsedEntry(BaseModel):
    """An entry recovered from a diary text document."""
    date: str
    index: int = Field(..., ge=1)
    tags: List[str] = Field(default_factory=list)
    content: str


class DateHeader(BaseModel):
    """Header that opens a new date-run."""
    model_config = ConfigDict(frozen=True)

    date: str
    tags: List[str] = Field(default_factory=list)


class IndexHeader(BaseModel):
    """Header that continues the current date-run at an explicit index."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1)
    tags: List[str] = Field(default_factory=list)


Header = Union[DateHeader, IndexHeader]


class DuplicatePair(BaseModel):
    """
    An imported entry whose date and trimmed content equal an existing entry.

    Both sides are kept as the caller's original objects.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    imported: Any
    existing: Any


class ImportResult(BaseModel):
    """Parsed entries plus the duplicate report for one document."""
    entries: List[ParsedEntry] = Field(default_factory=list)
    duplicates: List[DuplicatePair] = Field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)
