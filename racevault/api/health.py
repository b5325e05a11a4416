"""
Health check endpoints.

Liveness answers without touching anything. Readiness requires the catalog
tables to be reachable and reports how many assets each holds, so an empty
catalog (no content cache imported yet) is visible at a glance.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.db.database import get_session
from racevault.db.operations import count_assets

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalog: dict[str, int] | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Does not check dependencies."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness check.

    Returns 503 if the catalog tables cannot be queried.
    """
    try:
        catalog = await count_assets(session)
    except (SQLAlchemyError, OSError):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")
    return HealthResponse(status="ready", database="connected", catalog=dict(catalog))
