"""
Simple logging configuration.
"""
import logging
import logging.handlers
from enum import Enum
from pathlib import Path


class LogCategory(str, Enum):
    """Enumeration for standardized log categories."""
    APP = "app"
    REQUEST = "app.request"
    API_REQUESTS = "app.api_requests"
    IMPORT_EXPORT = "app.import_export"
    ERRORS = "app.errors"


DEFAULT_LOG_LEVEL = logging.INFO

# Fields that should be masked in logs
SENSITIVE_FIELDS = {
    'password',
    'token',
    'authorization',
    'secret',
    'api_key',
    'apikey',
}

# Longest string value kept verbatim in log context
MAX_CONTEXT_VALUE_LENGTH = 200


def _sanitize_data(data):
    """
    Sanitize data to mask sensitive fields.

    Recursively processes dictionaries, lists, and strings. Long strings
    (entry content, uploaded documents) are truncated so a diary never ends
    up in the log files.

    Args:
        data: Data to sanitize (dict, list, str, or any other type)

    Returns:
        Sanitized version of the data with sensitive fields masked
    """
    if data is None:
        return data

    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in SENSITIVE_FIELDS):
                sanitized[key] = '***MASKED***'
            else:
                sanitized[key] = _sanitize_data(value)
        return sanitized

    if isinstance(data, (list, tuple)):
        return [_sanitize_data(item) for item in data]

    if isinstance(data, str):
        if len(data) > MAX_CONTEXT_VALUE_LENGTH:
            return f"{data[:MAX_CONTEXT_VALUE_LENGTH]}...({len(data)} chars)"
        return data

    return data


def _resolve_log_level(level_value, default=DEFAULT_LOG_LEVEL):
    """Resolve string/integer log level inputs to a logging level."""
    if isinstance(level_value, str):
        candidate = level_value.strip()
        if not candidate:
            return default, True
        if candidate.isdigit():
            level_value = int(candidate)
        else:
            candidate = candidate.upper()
            try:
                return logging._checkLevel(candidate), False
            except (ValueError, TypeError):
                return default, True
    try:
        return logging._checkLevel(level_value), False
    except (ValueError, TypeError):
        return default, True


def _get_settings():
    """Lazy import to avoid circular dependency with config module."""
    from app.core.config import settings  # local import to break circular dependency
    return settings


def setup_logging():
    """Setup logging configuration."""
    settings = _get_settings()

    # Clear existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    resolved_level, used_default_level = _resolve_log_level(settings.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(resolved_level)

    root_logger.setLevel(resolved_level)
    root_logger.addHandler(console_handler)

    log_file = None
    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "app.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(resolved_level)
        root_logger.addHandler(file_handler)

    logging.getLogger(LogCategory.APP).setLevel(resolved_level)
    logging.getLogger(LogCategory.IMPORT_EXPORT).setLevel(resolved_level)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if used_default_level:
        logger.warning(
            "Invalid log level '%s' in configuration, falling back to INFO",
            settings.log_level
        )
    logger.info(
        "Logging configured - Level: %s",
        logging.getLevelName(resolved_level)
    )
    logger.info(f"File logging: {log_file if log_file else 'Disabled'}")


def _log_with_context(logger: logging.Logger, level: int, message: str, request_id: str = None, exc_info: bool = False, **kwargs):
    """Internal helper to format logs with an optional request ID and extra context.

    Args:
        logger: Logger instance to use
        level: Logging level
        message: Log message
        request_id: Optional request ID for context
        exc_info: Whether to include exception traceback
        **kwargs: Additional context to append to message (e.g., entry_count)
                   Sensitive fields will be automatically masked
    """
    if not logger.isEnabledFor(level):
        return

    log_message = f"[{request_id}] {message}" if request_id else message

    if kwargs:
        sanitized_kwargs = _sanitize_data(kwargs)
        extra_context = ", ".join(f"{k}={v}" for k, v in sanitized_kwargs.items())
        log_message = f"{log_message} ({extra_context})"

    logger.log(level, log_message, exc_info=exc_info)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float, request_id: str = None):
    """Log API requests with request ID."""
    logger = logging.getLogger(LogCategory.API_REQUESTS)
    message = f"{method} {path} - {status_code} - {duration_ms}ms"
    _log_with_context(logger, logging.INFO, message, request_id)


def log_import_export(action: str, request_id: str = None, **kwargs):
    """Log import/export operations with request ID."""
    logger = logging.getLogger(LogCategory.IMPORT_EXPORT)
    _log_with_context(logger, logging.INFO, action, request_id, **kwargs)


def log_info(message: str, request_id: str = None, **kwargs):
    """Log info messages with request ID."""
    logger = logging.getLogger(LogCategory.APP)
    _log_with_context(logger, logging.INFO, message, request_id, **kwargs)


def log_debug(message: str, request_id: str = None, **kwargs):
    """Log debug messages with request ID."""
    logger = logging.getLogger(LogCategory.APP)
    _log_with_context(logger, logging.DEBUG, message, request_id, **kwargs)


def log_warning(message: str, request_id: str = None, **kwargs):
    """Log warning messages with request ID."""
    logger = logging.getLogger(LogCategory.APP)
    _log_with_context(logger, logging.WARNING, message, request_id, **kwargs)


def log_error(error: Exception | str, request_id: str = None, **kwargs):
    """Log errors with request ID.

    Args:
        error: Exception object or error message string
        request_id: Optional request ID for context
        **kwargs: Additional context (e.g., path, method)
    """
    logger = logging.getLogger(LogCategory.ERRORS)
    message = f"Error: {str(error)}"
    # exc_info should only be True if we have an actual Exception
    exc_info = isinstance(error, Exception)
    _log_with_context(logger, logging.ERROR, message, request_id, exc_info=exc_info, **kwargs)
