"""
User asset API endpoints.

Tracks which catalog assets a user owns, at what level, and how many spare
cards they hold, and moves whole collections in and out as export files.
Every query is scoped to the user in the path; rows owned by someone else
are indistinguishable from missing rows.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.db import (
    asset_exists,
    create_user_asset,
    delete_user_asset,
    find_user_asset,
    get_user_asset,
    get_user_assets,
    update_user_asset,
)
from racevault.db.database import get_session
from racevault.models.assets import AssetType
from racevault.models.collection import AssetHolding
from racevault.services.collection_transfer import (
    UnknownAssetsError,
    export_collection,
    import_collection,
)

router = APIRouter(prefix="/users/{user_id}/assets", tags=["user-assets"])


class UserAssetResponse(BaseModel):
    """An asset owned by a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    asset_type: AssetType
    asset_id: str
    level: int
    card_count: int


class UserAssetListResponse(BaseModel):
    """All assets owned by a user."""

    user_id: str
    items: list[UserAssetResponse]
    count: int


class UserAssetCreateRequest(BaseModel):
    """Request model for adding an owned asset."""

    asset_type: AssetType
    asset_id: str = Field(..., min_length=1)
    level: int = Field(default=0, ge=0)
    card_count: int = Field(default=0, ge=0)


class UserAssetUpdateRequest(BaseModel):
    """Request model for updating an owned asset. Omitted fields are kept."""

    level: int | None = Field(default=None, ge=0)
    card_count: int | None = Field(default=None, ge=0)


class HoldingModel(BaseModel):
    """Level and card count for one catalog asset."""

    model_config = ConfigDict(from_attributes=True)

    asset_id: str = Field(..., min_length=1)
    level: int = Field(default=0, ge=0)
    card_count: int = Field(default=0, ge=0)


class CollectionExportResponse(BaseModel):
    """Every catalog asset with the user's progress on it."""

    user_id: str
    exported_at: datetime
    drivers: list[HoldingModel]
    car_parts: list[HoldingModel]
    boosts: list[HoldingModel]


class CollectionImportRequest(BaseModel):
    """
    A collection as exported. Omitted asset types are left untouched.

    Extra keys such as user_id and exported_at are ignored, so an export
    can be posted back as-is.
    """

    model_config = ConfigDict(extra="ignore")

    drivers: list[HoldingModel] | None = None
    car_parts: list[HoldingModel] | None = None
    boosts: list[HoldingModel] | None = None


class CollectionImportResponse(BaseModel):
    """Ownership rows written per imported asset type."""

    message: str
    imported: dict[str, int]


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    user_id: str
    item_id: int
    deleted: bool


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User asset not found",
    )


@router.get("", response_model=UserAssetListResponse)
async def list_user_assets(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    asset_type: Annotated[AssetType | None, Query()] = None,
) -> UserAssetListResponse:
    """List the assets a user owns."""
    items = await get_user_assets(session, user_id, asset_type)
    return UserAssetListResponse(
        user_id=user_id,
        items=[UserAssetResponse.model_validate(item) for item in items],
        count=len(items),
    )


@router.post("", response_model=UserAssetResponse, status_code=status.HTTP_201_CREATED)
async def add_user_asset(
    user_id: str,
    request: UserAssetCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserAssetResponse:
    """
    Mark a catalog asset as owned.

    Fails with 404 if the asset is not in the catalog and 409 if the user
    already owns it.
    """
    if not await asset_exists(session, request.asset_type, request.asset_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown {request.asset_type} '{request.asset_id}'",
        )

    if await find_user_asset(session, user_id, request.asset_type, request.asset_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{request.asset_type} '{request.asset_id}' is already owned",
        )

    item = await create_user_asset(
        session,
        user_id,
        request.asset_type,
        request.asset_id,
        level=request.level,
        card_count=request.card_count,
    )
    return UserAssetResponse.model_validate(item)


@router.get("/export", response_model=CollectionExportResponse)
async def export_user_collection(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionExportResponse:
    """Export the user's collection, listing every catalog asset."""
    export = await export_collection(session, user_id)
    return CollectionExportResponse(
        user_id=user_id,
        exported_at=datetime.now(UTC),
        drivers=[HoldingModel.model_validate(h) for h in export["driver"]],
        car_parts=[HoldingModel.model_validate(h) for h in export["car_part"]],
        boosts=[HoldingModel.model_validate(h) for h in export["boost"]],
    )


@router.post("/import", response_model=CollectionImportResponse)
async def import_user_collection(
    user_id: str,
    request: CollectionImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionImportResponse:
    """
    Restore the user's collection from an export.

    Each asset type in the request replaces what the user owned of that
    type. Fails with 400, writing nothing, if any id is not in the catalog.
    """
    sections: dict[AssetType, list[HoldingModel] | None] = {
        "driver": request.drivers,
        "car_part": request.car_parts,
        "boost": request.boosts,
    }
    holdings = {
        asset_type: [AssetHolding(h.asset_id, h.level, h.card_count) for h in entries]
        for asset_type, entries in sections.items()
        if entries is not None
    }

    try:
        imported = await import_collection(session, user_id, holdings)
    except UnknownAssetsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(e), "unknown": e.unknown},
        ) from e

    return CollectionImportResponse(
        message="Collection imported successfully",
        imported=dict(imported),
    )


@router.get("/{item_id}", response_model=UserAssetResponse)
async def get_owned_asset(
    user_id: str,
    item_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserAssetResponse:
    """Get a single owned asset."""
    item = await get_user_asset(session, user_id, item_id)
    if item is None:
        raise _not_found()
    return UserAssetResponse.model_validate(item)


@router.put("/{item_id}", response_model=UserAssetResponse)
async def update_owned_asset(
    user_id: str,
    item_id: int,
    request: UserAssetUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserAssetResponse:
    """Update the level and/or card count of an owned asset."""
    if request.level is None and request.card_count is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide level or card_count",
        )

    item = await get_user_asset(session, user_id, item_id)
    if item is None:
        raise _not_found()

    item = await update_user_asset(
        session, item, level=request.level, card_count=request.card_count
    )
    return UserAssetResponse.model_validate(item)


@router.delete("/{item_id}", response_model=DeleteResponse)
async def remove_owned_asset(
    user_id: str,
    item_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Remove an asset from a user's collection."""
    if not await delete_user_asset(session, user_id, item_id):
        raise _not_found()
    return DeleteResponse(user_id=user_id, item_id=item_id, deleted=True)
