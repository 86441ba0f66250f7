"""
API v1 router.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import health
from app.api.v1.endpoints.diary_io import router as diary_io_router

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(diary_io_router, prefix="/io", tags=["import-export"])
api_router.include_router(health.router, tags=["health"])
