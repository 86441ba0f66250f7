"""
Application configuration using pydantic-settings.
"""
import logging
from typing import Optional

from pydantic import field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict

from app import __version__

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Diary Interchange Service"
    app_version: str = __version__
    debug: bool = False
    environment: str = "development"

    # API
    api_v1_prefix: str = "/api/v1"

    # Import/Export Configuration
    import_max_file_size_mb: int = 5  # Max size for uploaded diary text
    max_entries_per_import: int = 10000
    duplicate_preview_length: int = 100  # Characters of content shown per duplicate

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None  # File logging is disabled unless set

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def import_max_file_size_bytes(self) -> int:
        return self.import_max_file_size_mb * 1024 * 1024

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalize ENVIRONMENT to lowercase."""
        return v.strip().lower() or "development"

    @field_validator('api_v1_prefix')
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Ensure the API prefix starts with a slash and has none trailing."""
        v = v.strip().rstrip("/")
        if not v.startswith("/"):
            v = f"/{v}"
        return v

    @field_validator('import_max_file_size_mb', 'max_entries_per_import', 'duplicate_preview_length')
    @classmethod
    def validate_positive_limits(cls, v: int, info: ValidationInfo) -> int:
        """Validate import limits are positive."""
        if v <= 0:
            raise ValueError(f"{info.field_name.upper()} must be positive")
        return v

    @field_validator('import_max_file_size_mb')
    @classmethod
    def warn_large_import_limit(cls, v: int) -> int:
        if v > 100:
            logger.warning(
                f"IMPORT_MAX_FILE_SIZE_MB is {v}MB. "
                "Imports are parsed in memory; consider reducing the limit."
            )
        return v

    @field_validator('log_dir')
    @classmethod
    def validate_log_dir(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty LOG_DIR as disabled file logging."""
        if v is None or not v.strip():
            return None
        return v.strip()


# Create settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
