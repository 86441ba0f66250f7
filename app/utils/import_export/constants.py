"""
Constants for import/export operations.

Centralizes magic numbers and configuration values for better maintainability.
"""


class ExportConfig:
    """Configuration constants for export operations."""

    # Downloads use CRLF so the file opens cleanly in any text editor
    NEWLINE = "\r\n"
    FILENAME_PREFIX = "diary"
    FILE_EXTENSION = ".txt"
    MEDIA_TYPE = "text/plain; charset=utf-8"


class ImportConfig:
    """Configuration constants for import operations."""

    ALLOWED_EXTENSIONS = {".txt"}
    TRUNCATION_SUFFIX = "..."
