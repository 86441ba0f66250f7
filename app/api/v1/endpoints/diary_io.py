"""
Diary text import/export endpoints.

These endpoints are stateless: callers send the entries (or uploaded text)
together with the user's format options and get the converted
representation back.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from app.core.config import Settings, get_settings
from app.core.logging_config import log_import_export
from app.data_transfer.diary_text import DEFAULT_FORMAT
from app.middleware.request_logging import request_id_ctx
from app.schemas.diary_io import (
    ExportRequest,
    FormatOptions,
    FormatResponse,
    ImportPlan,
    ImportPreview,
    ImportPreviewRequest,
    ImportRequest,
)
from app.services.diary_io_service import DiaryIOService
from app.utils.import_export.constants import ExportConfig

router = APIRouter(tags=["import-export"])


def get_diary_io_service(app_settings: Annotated[Settings, Depends(get_settings)]) -> DiaryIOService:
    return DiaryIOService(app_settings)


def _format_partial(options: FormatOptions | None) -> dict:
    return options.to_partial() if options else {}


@router.get("/format/defaults", response_model=FormatResponse)
async def get_default_format():
    """Return the default diary text format."""
    return FormatResponse(config=DEFAULT_FORMAT.to_options())


@router.post("/format/resolve", response_model=FormatResponse)
async def resolve_format(
    options: FormatOptions,
    service: Annotated[DiaryIOService, Depends(get_diary_io_service)],
):
    """Fill in defaults for a partial format configuration."""
    config = service.resolve_format(options.to_partial())
    return FormatResponse(config=config.to_options())


@router.post(
    "/export",
    response_class=Response,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Diary text file"},
        422: {"description": "Invalid entries"},
    },
)
async def export_diary(
    request: ExportRequest,
    service: Annotated[DiaryIOService, Depends(get_diary_io_service)],
):
    """
    Export entries as a diary text file.

    Entries are sorted by date and per-day index; the response is a
    download with a `Content-Disposition` header.
    """
    result = service.export_entries(
        request.entries,
        _format_partial(request.format),
        diary_id=request.diary_id,
    )
    log_import_export(
        "Export download prepared",
        request_id=request_id_ctx.get(),
        filename=result.filename,
    )
    return Response(
        content=result.content,
        media_type=ExportConfig.MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post(
    "/import/preview",
    response_model=ImportPreview,
    responses={
        400: {"description": "Missing content or too many entries"},
        413: {"description": "File too large"},
    },
)
async def preview_import(
    request: ImportPreviewRequest,
    service: Annotated[DiaryIOService, Depends(get_diary_io_service)],
):
    """Parse diary text and report which entries already exist."""
    return service.preview_import(
        request.content,
        _format_partial(request.format),
        existing=request.existing,
    )


@router.post(
    "/import",
    response_model=ImportPlan,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Missing content or too many entries"},
        413: {"description": "File too large"},
    },
)
async def import_diary(
    request: ImportRequest,
    service: Annotated[DiaryIOService, Depends(get_diary_io_service)],
):
    """
    Parse diary text and return the entries to store.

    Duplicates of existing entries are left out unless `skipDuplicates`
    is false. Assigning final indices and a target diary is up to the caller.
    """
    return service.plan_import(
        request.content,
        _format_partial(request.format),
        existing=request.existing,
        skip_duplicates=request.skip_duplicates,
    )
