"""Shared helpers for the diary test suites."""

from app.core.config import Settings

from .api import DiaryApiClient, DiaryApiError


def make_settings(**kwargs) -> Settings:
    """Create Settings without loading values from .env or environment."""
    return Settings(_env_file=None, **kwargs)


__all__ = [
    "DiaryApiClient",
    "DiaryApiError",
    "make_settings",
]
