"""
Diary import/export service.

Wraps the plain-text diary codec with the checks an upload endpoint needs:
content validation, size and entry-count limits, duplicate summaries and
export filenames. The service never touches storage; callers pass in the
entries they loaded and decide where imported entries go.
"""
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Optional

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import FileTooLargeError, FileValidationError, TooManyEntriesError
from app.core.logging_config import log_import_export, log_info
from app.data_transfer.diary_text import (
    FormatConfig,
    export_document,
    import_document,
    resolve_format_config,
)
from app.data_transfer.diary_text.format_config import FormatOptions
from app.data_transfer.diary_text.models import DuplicatePair, ParsedEntry
from app.schemas.diary_io import DuplicateSummary, ExportResult, ImportPlan, ImportPreview
from app.utils.import_export.constants import ExportConfig, ImportConfig


class DiaryIOService:
    """Service for diary text import and export."""

    def __init__(self, app_settings: Optional[Settings] = None):
        """
        Initialize the service.

        Args:
            app_settings: Settings to read limits from (defaults to the app settings)
        """
        self.settings = app_settings or default_settings

    @staticmethod
    def resolve_format(options: FormatOptions = None) -> FormatConfig:
        return resolve_format_config(options)

    @staticmethod
    def build_export_filename(diary_id: Optional[int] = None, today: Optional[date] = None) -> str:
        """
        Build the download filename for an export.

        Example: ``diary_diary3_export_2024-01-15.txt``
        """
        today = today or datetime.now(timezone.utc).date()
        diary_label = f"diary{diary_id}_" if diary_id else ""
        return f"{ExportConfig.FILENAME_PREFIX}_{diary_label}export_{today.isoformat()}{ExportConfig.FILE_EXTENSION}"

    def export_entries(
        self,
        entries: Iterable[Any],
        options: FormatOptions = None,
        diary_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> ExportResult:
        """
        Render entries as a downloadable diary text file.

        Args:
            entries: Entries already loaded from storage
            options: The user's saved format options
            diary_id: Diary the entries belong to, used in the filename
            today: Date used in the filename (defaults to today in UTC)

        Returns:
            ExportResult with the document text and filename
        """
        entries = list(entries)
        content = export_document(entries, self.resolve_format(options), newline=ExportConfig.NEWLINE)
        filename = self.build_export_filename(diary_id, today)

        log_import_export(
            "Diary export generated",
            entry_count=len(entries),
            diary_id=diary_id,
            size_bytes=len(content.encode("utf-8")),
        )
        return ExportResult(content=content, filename=filename, entry_count=len(entries))

    def validate_import_content(self, content: Any) -> None:
        """
        Check uploaded diary text before parsing.

        Raises:
            FileValidationError: If content is missing or not text
            FileTooLargeError: If content exceeds the configured size limit
        """
        if content is None or content == "":
            raise FileValidationError("File content is required")
        if not isinstance(content, str):
            raise FileValidationError("Content must be a string")

        size_bytes = len(content.encode("utf-8"))
        if size_bytes > self.settings.import_max_file_size_bytes:
            raise FileTooLargeError(
                f"File too large. Maximum size is {self.settings.import_max_file_size_mb}MB"
            )

    def summarize_duplicate(self, pair: DuplicatePair) -> DuplicateSummary:
        """Shorten a duplicate pair to its date and a content preview."""
        imported = pair.imported
        limit = self.settings.duplicate_preview_length
        content = imported.content
        if len(content) > limit:
            content = content[:limit] + ImportConfig.TRUNCATION_SUFFIX
        return DuplicateSummary(date=imported.date, content=content)

    def preview_import(
        self,
        content: Any,
        options: FormatOptions = None,
        existing: Iterable[Any] = (),
    ) -> ImportPreview:
        """
        Parse uploaded diary text and report duplicates without importing.

        Args:
            content: Uploaded document text
            options: The user's saved format options
            existing: Entries already stored for the user (or diary)

        Returns:
            ImportPreview with parsed entries and duplicate summaries
        """
        self.validate_import_content(content)
        result = import_document(content, self.resolve_format(options), existing=existing)

        log_import_export(
            "Diary import previewed",
            entry_count=len(result.entries),
            duplicate_count=result.duplicate_count,
        )
        return ImportPreview(
            entries=result.entries,
            total_count=len(result.entries),
            duplicates=[self.summarize_duplicate(pair) for pair in result.duplicates],
            duplicate_count=result.duplicate_count,
        )

    def plan_import(
        self,
        content: Any,
        options: FormatOptions = None,
        existing: Iterable[Any] = (),
        skip_duplicates: bool = True,
    ) -> ImportPlan:
        """
        Parse uploaded diary text and select the entries to store.

        Args:
            content: Uploaded document text
            options: The user's saved format options
            existing: Entries already stored for the user (or diary)
            skip_duplicates: Leave out entries reported as duplicates

        Returns:
            ImportPlan with the entries to store and skip counts

        Raises:
            FileValidationError: If content is missing or not text
            FileTooLargeError: If content exceeds the size limit
            TooManyEntriesError: If the document holds too many entries
        """
        self.validate_import_content(content)
        config = self.resolve_format(options)
        result = import_document(content, config, existing=existing if skip_duplicates else ())

        if len(result.entries) > self.settings.max_entries_per_import:
            raise TooManyEntriesError(len(result.entries), self.settings.max_entries_per_import)

        skipped_ids = {id(pair.imported) for pair in result.duplicates}
        to_import: List[ParsedEntry] = [
            entry for entry in result.entries if id(entry) not in skipped_ids
        ]
        skipped_count = len(result.entries) - len(to_import)

        log_info(
            "Diary import planned",
            total_processed=len(result.entries),
            import_count=len(to_import),
            skipped_count=skipped_count,
        )
        return ImportPlan(
            entries=to_import,
            skipped_count=skipped_count,
            total_processed=len(result.entries),
        )
