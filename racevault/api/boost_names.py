"""
Custom boost name endpoints.

Exported boost names are generic ("Boost TURBO"), so each player can label
their boosts. Names belong to the user in the path and must be unique among
that user's boosts.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.db import (
    asset_exists,
    boost_name_in_use,
    delete_boost_name,
    get_boost_name,
    get_boost_names,
    set_boost_name,
)
from racevault.db.database import get_session

router = APIRouter(prefix="/users/{user_id}/boost-names", tags=["boost-names"])

MAX_BOOST_NAME_LENGTH = 64


class BoostNamesResponse(BaseModel):
    """All custom boost names of a user, keyed by boost id."""

    user_id: str
    names: dict[str, str]


class BoostNameResponse(BaseModel):
    """A user's custom name for one boost."""

    boost_id: str
    custom_name: str | None = None


class BoostNameRequest(BaseModel):
    """Request model for naming a boost."""

    custom_name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_BOOST_NAME_LENGTH,
        pattern=r"^[A-Za-z0-9. -]+$",
        description="Letters, numbers, hyphens, periods and spaces",
    )

    @field_validator("custom_name")
    @classmethod
    def no_surrounding_spaces(cls, value: str) -> str:
        if value != value.strip():
            raise ValueError("Custom name cannot start or end with spaces")
        return value


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    user_id: str
    boost_id: str
    deleted: bool


@router.get("", response_model=BoostNamesResponse)
async def list_boost_names(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BoostNamesResponse:
    """Get every custom boost name the user has set."""
    return BoostNamesResponse(user_id=user_id, names=await get_boost_names(session, user_id))


@router.get("/{boost_id}", response_model=BoostNameResponse)
async def get_custom_boost_name(
    user_id: str,
    boost_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BoostNameResponse:
    """Get the custom name of one boost. custom_name is null if none is set."""
    row = await get_boost_name(session, user_id, boost_id)
    return BoostNameResponse(
        boost_id=boost_id,
        custom_name=row.custom_name if row is not None else None,
    )


@router.put("/{boost_id}", response_model=BoostNameResponse)
async def put_custom_boost_name(
    user_id: str,
    boost_id: str,
    request: BoostNameRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BoostNameResponse:
    """
    Set or replace the custom name of a boost.

    Fails with 404 if the boost is not in the catalog and 409 if the user
    already uses the name for another boost.
    """
    if not await asset_exists(session, "boost", boost_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown boost '{boost_id}'",
        )

    if await boost_name_in_use(session, user_id, request.custom_name, boost_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"'{request.custom_name}' is already used for another boost",
        )

    row = await set_boost_name(session, user_id, boost_id, request.custom_name)
    return BoostNameResponse(boost_id=boost_id, custom_name=row.custom_name)


@router.delete("/{boost_id}", response_model=DeleteResponse)
async def delete_custom_boost_name(
    user_id: str,
    boost_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Remove the custom name of a boost."""
    if not await delete_boost_name(session, user_id, boost_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No custom name for boost '{boost_id}'",
        )
    return DeleteResponse(user_id=user_id, boost_id=boost_id, deleted=True)
