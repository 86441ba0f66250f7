"""
Diary import/export schemas.

Request and response bodies for the diary text import/export endpoints and
the results returned by ``DiaryIOService``. JSON keys are camelCase.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.data_transfer.diary_text.models import DiaryEntry, ParsedEntry


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FormatOptions(CamelModel):
    """Sparse format configuration; omitted options take their defaults."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    entry_separator: Optional[str] = None
    same_day_separator: Optional[str] = None
    date_prefix: Optional[str] = None
    date_suffix: Optional[str] = None
    date_format: Optional[str] = None
    tag_open_bracket: Optional[str] = None
    tag_close_bracket: Optional[str] = None
    tag_separator: Optional[str] = None

    def to_partial(self) -> Dict[str, str]:
        """Options that were actually supplied, keyed by snake_case name."""
        return self.model_dump(exclude_none=True)


class StoredEntry(CamelModel):
    """
    An entry the caller already has in storage.

    Deliberately lenient: entries with missing content or odd dates are
    accepted and simply never match as duplicates.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[Union[int, str]] = None
    date: Optional[Union[datetime, date, str]] = None
    index: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    content: Optional[str] = None


class ExportRequest(CamelModel):
    entries: List[DiaryEntry] = Field(default_factory=list)
    format: Optional[FormatOptions] = None
    diary_id: Optional[int] = Field(None, description="Diary the entries were loaded from")


class ImportPreviewRequest(CamelModel):
    content: str = Field(..., description="Diary text to preview")
    format: Optional[FormatOptions] = None
    existing: List[StoredEntry] = Field(default_factory=list)


class ImportRequest(ImportPreviewRequest):
    skip_duplicates: bool = Field(True, description="Leave out entries that already exist")


class ExportResult(CamelModel):
    content: str
    filename: str
    entry_count: int


class DuplicateSummary(CamelModel):
    date: str
    content: str


class ImportPreview(CamelModel):
    entries: List[ParsedEntry] = Field(default_factory=list)
    total_count: int = 0
    duplicates: List[DuplicateSummary] = Field(default_factory=list)
    duplicate_count: int = 0


class ImportPlan(CamelModel):
    """Entries ready to store; index assignment and diary placement stay with the caller."""
    entries: List[ParsedEntry] = Field(default_factory=list)
    skipped_count: int = 0
    total_processed: int = 0

    @property
    def import_count(self) -> int:
        return len(self.entries)


class FormatResponse(CamelModel):
    config: Dict[str, Any]
