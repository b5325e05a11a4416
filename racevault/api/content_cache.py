"""
Content-cache upload endpoint.

Admins upload the game's content_cache.json export; drivers, car parts and
boosts are imported into the catalog with change detection.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.api.auth import require_admin
from racevault.db.database import get_admin_session
from racevault.parsers.content_cache import parse_content_cache, parse_season_filter
from racevault.services.content_import import import_content_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/content-cache", tags=["admin"])


class ModifiedItemResponse(BaseModel):
    """A stored asset that differs from the uploaded one."""

    id: str
    name: str
    changes: list[str] = Field(
        default_factory=list,
        description="Names of the fields that differ",
    )


class ImportResultResponse(BaseModel):
    """Import outcome for one entity type."""

    new: int = 0
    modified: int = 0
    unchanged: int = 0
    modified_items: list[ModifiedItemResponse] = Field(default_factory=list)


class ImportResultsResponse(BaseModel):
    """Import outcome per entity type."""

    drivers: ImportResultResponse
    car_parts: ImportResultResponse
    boosts: ImportResultResponse


class ImportSummaryResponse(ImportResultsResponse):
    """Totals across entity types."""

    total_new: int
    total_modified: int
    total_unchanged: int
    total_processed: int


class UploadResponse(BaseModel):
    """Response model for a content-cache upload."""

    message: str
    season_filter: list[int] = Field(
        default_factory=list,
        description="Seasons that were imported; empty means all seasons",
    )
    allow_modifications: bool
    results: ImportResultsResponse
    summary: ImportSummaryResponse


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def upload_content_cache(
    session: Annotated[AsyncSession, Depends(get_admin_session)],
    file: Annotated[UploadFile | None, File(description="content_cache.json export")] = None,
    season_filter: Annotated[
        str | None,
        Form(description="Comma-separated season numbers, e.g. '6,7'. Empty imports all."),
    ] = None,
    allow_modifications: Annotated[
        str,
        Form(description="'true' to write changed records back instead of only reporting"),
    ] = "false",
) -> UploadResponse:
    """
    Import a content-cache export.

    The whole file is validated before anything is written, so a malformed
    file is rejected with 400 and leaves the catalog untouched. New assets
    are inserted. Assets that already exist are compared field by field;
    differences are always reported and are written back only when
    allow_modifications is 'true'.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    if not file.filename or not file.filename.lower().endswith(".json"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be a JSON file",
        )

    seasons = parse_season_filter(season_filter)
    allow = allow_modifications.strip().lower() == "true"

    # ContentCacheError is answered with 400 by the app-level handler
    payload = parse_content_cache(await file.read())

    logger.info(
        "Content cache upload %s (seasons=%s, allow_modifications=%s)",
        file.filename,
        sorted(seasons) or "all",
        allow,
    )
    results = await import_content_cache(session, payload, seasons, allow)

    return UploadResponse(
        message="Content cache processed successfully",
        season_filter=sorted(seasons),
        allow_modifications=allow,
        results=ImportResultsResponse.model_validate(results.to_dict()),
        summary=ImportSummaryResponse.model_validate(results.summary()),
    )
