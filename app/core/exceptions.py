"""
Custom application exceptions.
"""

class DiaryAppException(Exception):
    """Base exception for the diary interchange service."""
    pass


class FileTooLargeError(DiaryAppException):
    """Raised when uploaded file exceeds size limit."""
    pass


class FileValidationError(DiaryAppException):
    """Raised when file validation fails."""
    pass


class ValidationError(DiaryAppException):
    """Raised when validation fails."""
    pass


class TooManyEntriesError(ValidationError):
    """Raised when an import holds more entries than allowed."""

    def __init__(self, found: int, limit: int):
        super().__init__(
            f"Too many entries. Maximum {limit} entries per import. Found {found}."
        )
        self.found = found
        self.limit = limit
