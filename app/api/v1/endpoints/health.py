"""
Simple health check endpoint.
"""
from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["health"])


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=Dict[str, Any])
async def health_check():
    """Report service status and version."""
    return {
        "status": "healthy",
        "timestamp": _utc_now_iso(),
        "service": settings.app_name,
        "version": settings.app_version,
    }
