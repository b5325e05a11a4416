"""
Catalog API endpoints.

Read-only browsing of the imported drivers, car parts and boosts.
"""

import math
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from racevault.db import list_assets
from racevault.db.database import get_session
from racevault.models.assets import AssetType

router = APIRouter(tags=["catalog"])


class DriverResponse(BaseModel):
    """A driver in the catalog."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    rarity: int
    series: int
    ordinal: int = 0
    icon: str | None = None
    cc_price: int = 0
    num_duplicates_after_unlock: int = 0
    collection_id: str | None = None
    visual_override: str | None = None
    collection_sub_name: str | None = None
    min_gp_tier: int | None = None
    tag_name: str | None = None
    stats_per_level: list[Any] = Field(default_factory=list)
    season: int | None = None


class CarPartResponse(BaseModel):
    """A car part in the catalog."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    rarity: int
    series: int
    car_part_type: int = 0
    icon: str | None = None
    cc_price: int = 0
    num_duplicates_after_unlock: int = 0
    collection_id: str | None = None
    visual_override: str | None = None
    collection_sub_name: str | None = None
    stats_per_level: list[Any] = Field(default_factory=list)
    season: int | None = None


class BoostResponse(BaseModel):
    """A boost in the catalog."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str | None = None
    boost_stats: dict[str, int] = Field(default_factory=dict)
    season: int | None = None


class Pagination(BaseModel):
    """Paging information for list responses."""

    page: int
    limit: int
    total: int
    total_pages: int


class DriverListResponse(BaseModel):
    data: list[DriverResponse]
    pagination: Pagination


class CarPartListResponse(BaseModel):
    data: list[CarPartResponse]
    pagination: Pagination


class BoostListResponse(BaseModel):
    data: list[BoostResponse]
    pagination: Pagination


class CatalogFilters(BaseModel):
    """Query filters shared by every catalog listing."""

    season: int | None = None
    search: str | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


def catalog_filters(
    season: Annotated[int | None, Query(ge=0)] = None,
    search: Annotated[str | None, Query(description="Case-insensitive name match")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> CatalogFilters:
    return CatalogFilters(season=season, search=search, page=page, limit=limit)


def _pagination(filters: CatalogFilters, total: int) -> Pagination:
    return Pagination(
        page=filters.page,
        limit=filters.limit,
        total=total,
        total_pages=math.ceil(total / filters.limit),
    )


async def _list(
    session: AsyncSession,
    asset_type: AssetType,
    filters: CatalogFilters,
    **extra: int | None,
) -> tuple[list[Any], Pagination]:
    records, total = await list_assets(
        session,
        asset_type,
        season=filters.season,
        search=filters.search,
        page=filters.page,
        limit=filters.limit,
        **extra,
    )
    return records, _pagination(filters, total)


@router.get("/drivers", response_model=DriverListResponse)
async def list_drivers(
    session: Annotated[AsyncSession, Depends(get_session)],
    filters: Annotated[CatalogFilters, Depends(catalog_filters)],
    rarity: Annotated[int | None, Query(ge=0)] = None,
    series: Annotated[int | None, Query(ge=0)] = None,
) -> DriverListResponse:
    """List drivers, ordered by name."""
    records, pagination = await _list(session, "driver", filters, rarity=rarity, series=series)
    return DriverListResponse(
        data=[DriverResponse.model_validate(r) for r in records],
        pagination=pagination,
    )


@router.get("/car-parts", response_model=CarPartListResponse)
async def list_car_parts(
    session: Annotated[AsyncSession, Depends(get_session)],
    filters: Annotated[CatalogFilters, Depends(catalog_filters)],
    rarity: Annotated[int | None, Query(ge=0)] = None,
    series: Annotated[int | None, Query(ge=0)] = None,
    car_part_type: Annotated[int | None, Query(ge=0)] = None,
) -> CarPartListResponse:
    """List car parts, ordered by name."""
    records, pagination = await _list(
        session,
        "car_part",
        filters,
        rarity=rarity,
        series=series,
        car_part_type=car_part_type,
    )
    return CarPartListResponse(
        data=[CarPartResponse.model_validate(r) for r in records],
        pagination=pagination,
    )


@router.get("/boosts", response_model=BoostListResponse)
async def list_boosts(
    session: Annotated[AsyncSession, Depends(get_session)],
    filters: Annotated[CatalogFilters, Depends(catalog_filters)],
) -> BoostListResponse:
    """List boosts, ordered by name."""
    records, pagination = await _list(session, "boost", filters)
    return BoostListResponse(
        data=[BoostResponse.model_validate(r) for r in records],
        pagination=pagination,
    )
