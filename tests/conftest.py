"""
Pytest fixtures shared across the unit, API and CLI suites.
"""
from __future__ import annotations

from typing import Dict, List

import pytest

from app.core.config import Settings
from app.data_transfer.diary_text import DEFAULT_FORMAT
from tests.lib import DiaryApiClient, make_settings

ENTRY_SEPARATOR = DEFAULT_FORMAT.entry_separator
SAME_DAY_SEPARATOR = DEFAULT_FORMAT.same_day_separator


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def api_client() -> DiaryApiClient:
    """API client bound to the application in-process."""
    from app.main import app

    client = DiaryApiClient(app)
    yield client
    client.close()


@pytest.fixture
def sample_entries() -> List[Dict]:
    """
    Entries over two days with contiguous per-day indices, deliberately out of order.
    """
    return [
        {"date": "2024-01-16", "index": 1, "tags": ["travel"], "content": "Train to the coast."},
        {"date": "2024-01-15", "index": 2, "tags": ["personal"], "content": "Evening walk.\nCold but clear."},
        {"date": "2024-01-15", "index": 1, "tags": ["work", "personal"], "content": "Shipped the release."},
    ]


@pytest.fixture
def sample_document() -> str:
    """Default-format document with one two-entry day and one single-entry day."""
    return (
        "---2024-01-15--[work,personal]\n"
        "\n"
        "Shipped the release.\n"
        "\n"
        f"{SAME_DAY_SEPARATOR}\n"
        "\n"
        "---2--[personal]\n"
        "\n"
        "Evening walk.\n"
        "Cold but clear.\n"
        "\n"
        f"{ENTRY_SEPARATOR}\n"
        "\n"
        "---2024-01-16--[travel]\n"
        "\n"
        "Train to the coast.\n"
        "\n"
        f"{ENTRY_SEPARATOR}\n"
    )
