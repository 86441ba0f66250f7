"""
Main FastAPI application for the diary interchange service.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import (
    DiaryAppException, FileTooLargeError, FileValidationError, ValidationError,
)
from app.core.logging_config import setup_logging, log_info, log_warning, log_error
from app.middleware.request_logging import request_id_ctx, RequestLoggingMiddleware

# -----------------------------------------------------------------------------
# Startup / Shutdown
# -----------------------------------------------------------------------------
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log_info(f"Starting up {settings.app_name}...")
    yield
    log_info(f"Shutting down {settings.app_name}...")


# -----------------------------------------------------------------------------
# App Initialization
# -----------------------------------------------------------------------------
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Plain-text diary import and export",
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# -----------------------------------------------------------------------------
# Middleware Configuration
# -----------------------------------------------------------------------------
# Exports of large diaries compress well
app.add_middleware(GZipMiddleware, minimum_size=1024)

app.add_middleware(RequestLoggingMiddleware)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add X-Process-Time header."""
    start_time = time.time()
    response = await call_next(request)
    response.headers["X-Process-Time"] = str(time.time() - start_time)
    return response

# -----------------------------------------------------------------------------
# Exception Handlers
# -----------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed logging."""
    request_id = request_id_ctx.get()
    errors = exc.errors()

    sanitized_errors = [
        {
            "loc": err.get("loc"),
            "msg": err.get("msg"),
            "type": err.get("type")
        }
        for err in errors
    ]

    log_warning(
        "Request validation failed",
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        errors=sanitized_errors,
    )

    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "message": sanitized_errors,
            "request_id": request_id
        },
    )


@app.exception_handler(DiaryAppException)
async def diary_app_exception_handler(request: Request, exc: DiaryAppException):
    request_id = request_id_ctx.get()
    log_error(exc, request_id=request_id, path=request.url.path)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, FileTooLargeError):
        status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    elif isinstance(exc, (FileValidationError, ValidationError)):
        status_code = status.HTTP_400_BAD_REQUEST

    message = (
        "An unexpected internal error occurred."
        if settings.environment == "production" and status_code == 500
        else str(exc)
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "message": message, "request_id": request_id},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    request_id = request_id_ctx.get()
    log_error(exc, request_id=request_id)
    msg = (
        "An unexpected error occurred. Please try again later."
        if settings.environment == "production"
        else str(exc)
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "message": msg, "request_id": request_id},
    )

# -----------------------------------------------------------------------------
# API Routers
# -----------------------------------------------------------------------------
app.include_router(api_router, prefix=settings.api_v1_prefix)


# -----------------------------------------------------------------------------
# Entry Point
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
