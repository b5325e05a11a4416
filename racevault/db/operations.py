"""
Database CRUD operations.

Provides async functions for reading and writing catalog assets (drivers,
car parts, boosts) and the per-user ownership rows that reference them.
"""

import dataclasses
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.models.assets import (
    AssetRecord,
    AssetType,
    BoostRecord,
    CarPartRecord,
    DriverRecord,
)
from racevault.models.collection import AssetHolding
from racevault.models.db import BoostDB, CarPartDB, DriverDB, UserAssetDB, UserBoostNameDB

AssetRow = DriverDB | CarPartDB | BoostDB

RECORD_TYPES: dict[AssetType, type[AssetRecord]] = {
    "driver": DriverRecord,
    "car_part": CarPartRecord,
    "boost": BoostRecord,
}

_TABLES: dict[type[Any], type[AssetRow]] = {
    DriverRecord: DriverDB,
    CarPartRecord: CarPartDB,
    BoostRecord: BoostDB,
}


def table_for(record_type: type[AssetRecord]) -> type[AssetRow]:
    """ORM model storing records of the given type."""
    return _TABLES[record_type]


def row_to_record(row: AssetRow, record_type: type[AssetRecord]) -> AssetRecord:
    """Convert a stored row to its canonical record."""
    values = {f.name: getattr(row, f.name) for f in dataclasses.fields(record_type)}
    return record_type(**values)


def _record_values(record: AssetRecord) -> dict[str, Any]:
    return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}


# --- Catalog Import Operations ---


async def fetch_existing_assets(
    session: AsyncSession,
    record_type: type[AssetRecord],
    ids: Iterable[str],
) -> dict[str, AssetRecord]:
    """
    Get stored records for the given ids.

    Returns a dict keyed by id. Ids with no stored row are absent.
    Rows are converted to records immediately so callers never hold
    ORM instances across commits.
    """
    id_list = list(dict.fromkeys(ids))
    if not id_list:
        return {}

    table = table_for(record_type)
    result = await session.execute(select(table).where(table.id.in_(id_list)))
    return {row.id: row_to_record(row, record_type) for row in result.scalars().all()}


async def insert_asset(session: AsyncSession, record: AssetRecord) -> None:
    """
    Insert a new catalog asset.

    Raises IntegrityError if an asset with the same id already exists.
    """
    table = table_for(type(record))
    session.add(table(**_record_values(record)))
    await session.flush()


async def update_asset(session: AsyncSession, record: AssetRecord) -> None:
    """Overwrite every field of a stored asset with the record's values."""
    table = table_for(type(record))
    values = _record_values(record)
    asset_id = values.pop("id")
    await session.execute(update(table).where(table.id == asset_id).values(**values))


# --- Catalog Browse Operations ---


async def list_assets(
    session: AsyncSession,
    asset_type: AssetType,
    *,
    rarity: int | None = None,
    series: int | None = None,
    season: int | None = None,
    search: str | None = None,
    car_part_type: int | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[AssetRecord], int]:
    """
    Get one page of catalog assets, ordered by name.

    Filters that do not apply to the asset type (e.g. rarity on boosts)
    are ignored.

    Returns:
        Tuple of (records on this page, total matching records).
    """
    record_type = RECORD_TYPES[asset_type]
    table = table_for(record_type)

    query: Select[Any] = select(table)
    if rarity is not None and hasattr(table, "rarity"):
        query = query.where(table.rarity == rarity)
    if series is not None and hasattr(table, "series"):
        query = query.where(table.series == series)
    if car_part_type is not None and table is CarPartDB:
        query = query.where(CarPartDB.car_part_type == car_part_type)
    if season is not None:
        query = query.where(table.season == season)
    if search:
        query = query.where(table.name.icontains(search, autoescape=True))

    total = await session.scalar(select(func.count()).select_from(query.subquery()))

    result = await session.execute(
        query.order_by(table.name, table.id).offset((page - 1) * limit).limit(limit)
    )
    records = [row_to_record(row, record_type) for row in result.scalars().all()]
    return records, int(total or 0)


async def asset_exists(session: AsyncSession, asset_type: AssetType, asset_id: str) -> bool:
    """Check whether a catalog asset exists."""
    table = table_for(RECORD_TYPES[asset_type])
    return await session.get(table, asset_id) is not None


async def existing_asset_ids(
    session: AsyncSession, asset_type: AssetType, asset_ids: Iterable[str]
) -> set[str]:
    """Get the subset of ids that exist in the catalog."""
    ids = set(asset_ids)
    if not ids:
        return set()
    table = table_for(RECORD_TYPES[asset_type])
    result = await session.execute(select(table.id).where(table.id.in_(ids)))
    return set(result.scalars().all())


async def list_asset_ids(session: AsyncSession, asset_type: AssetType) -> list[str]:
    """Get every catalog id of one type, ordered by name."""
    table = table_for(RECORD_TYPES[asset_type])
    result = await session.execute(select(table.id).order_by(table.name, table.id))
    return list(result.scalars().all())


async def count_assets(session: AsyncSession) -> dict[AssetType, int]:
    """Count catalog rows per asset type."""
    counts: dict[AssetType, int] = {}
    for asset_type, record_type in RECORD_TYPES.items():
        result = await session.execute(select(func.count()).select_from(table_for(record_type)))
        counts[asset_type] = int(result.scalar_one())
    return counts


# --- User Asset Operations ---


async def get_user_assets(
    session: AsyncSession,
    user_id: str,
    asset_type: AssetType | None = None,
) -> list[UserAssetDB]:
    """Get all assets owned by a user, optionally of one type."""
    query = select(UserAssetDB).where(UserAssetDB.user_id == user_id)
    if asset_type is not None:
        query = query.where(UserAssetDB.asset_type == asset_type)
    result = await session.execute(query.order_by(UserAssetDB.id))
    return list(result.scalars().all())


async def get_user_asset(
    session: AsyncSession, user_id: str, item_id: int
) -> UserAssetDB | None:
    """
    Get a single owned asset.

    Returns None if the item does not exist or belongs to another user.
    """
    result = await session.execute(
        select(UserAssetDB).where(
            UserAssetDB.id == item_id,
            UserAssetDB.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def find_user_asset(
    session: AsyncSession, user_id: str, asset_type: AssetType, asset_id: str
) -> UserAssetDB | None:
    """Get a user's ownership row for a specific catalog asset."""
    result = await session.execute(
        select(UserAssetDB).where(
            UserAssetDB.user_id == user_id,
            UserAssetDB.asset_type == asset_type,
            UserAssetDB.asset_id == asset_id,
        )
    )
    return result.scalar_one_or_none()


async def create_user_asset(
    session: AsyncSession,
    user_id: str,
    asset_type: AssetType,
    asset_id: str,
    level: int = 0,
    card_count: int = 0,
) -> UserAssetDB:
    """
    Record that a user owns a catalog asset.

    Raises IntegrityError if the user already owns it.
    """
    item = UserAssetDB(
        user_id=user_id,
        asset_type=asset_type,
        asset_id=asset_id,
        level=level,
        card_count=card_count,
    )
    session.add(item)
    await session.flush()
    return item


async def update_user_asset(
    session: AsyncSession,
    item: UserAssetDB,
    level: int | None = None,
    card_count: int | None = None,
) -> UserAssetDB:
    """Update level and/or card count of an owned asset."""
    if level is not None:
        item.level = level
    if card_count is not None:
        item.card_count = card_count
    await session.flush()
    await session.refresh(item)
    return item


async def delete_user_asset(session: AsyncSession, user_id: str, item_id: int) -> bool:
    """
    Delete an owned asset.

    Returns True if deleted, False if not found for this user.
    """
    result = await session.execute(
        delete(UserAssetDB).where(
            UserAssetDB.id == item_id,
            UserAssetDB.user_id == user_id,
        )
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


async def replace_user_assets(
    session: AsyncSession,
    user_id: str,
    asset_type: AssetType,
    holdings: Iterable[AssetHolding],
) -> int:
    """
    Replace every ownership row of one type for a user.

    Returns the number of rows written.
    """
    await session.execute(
        delete(UserAssetDB).where(
            UserAssetDB.user_id == user_id,
            UserAssetDB.asset_type == asset_type,
        )
    )
    items = [
        UserAssetDB(
            user_id=user_id,
            asset_type=asset_type,
            asset_id=holding.asset_id,
            level=holding.level,
            card_count=holding.card_count,
        )
        for holding in holdings
    ]
    session.add_all(items)
    await session.flush()
    return len(items)


# --- Boost Name Operations ---


async def get_boost_names(session: AsyncSession, user_id: str) -> dict[str, str]:
    """Get a user's custom boost names keyed by boost id."""
    result = await session.execute(
        select(UserBoostNameDB).where(UserBoostNameDB.user_id == user_id)
    )
    return {row.boost_id: row.custom_name for row in result.scalars().all()}


async def get_boost_name(
    session: AsyncSession, user_id: str, boost_id: str
) -> UserBoostNameDB | None:
    """Get a user's custom name for one boost."""
    result = await session.execute(
        select(UserBoostNameDB).where(
            UserBoostNameDB.user_id == user_id,
            UserBoostNameDB.boost_id == boost_id,
        )
    )
    return result.scalar_one_or_none()


async def boost_name_in_use(
    session: AsyncSession, user_id: str, custom_name: str, exclude_boost_id: str
) -> bool:
    """Check whether a user already gave this name to a different boost."""
    result = await session.execute(
        select(UserBoostNameDB.id).where(
            UserBoostNameDB.user_id == user_id,
            UserBoostNameDB.custom_name == custom_name,
            UserBoostNameDB.boost_id != exclude_boost_id,
        )
    )
    return result.first() is not None


async def set_boost_name(
    session: AsyncSession, user_id: str, boost_id: str, custom_name: str
) -> UserBoostNameDB:
    """
    Set or replace a user's custom name for a boost.

    Raises IntegrityError if the name is already used for another boost.
    """
    row = await get_boost_name(session, user_id, boost_id)
    if row is None:
        row = UserBoostNameDB(user_id=user_id, boost_id=boost_id, custom_name=custom_name)
        session.add(row)
    else:
        row.custom_name = custom_name
    await session.flush()
    return row


async def delete_boost_name(session: AsyncSession, user_id: str, boost_id: str) -> bool:
    """
    Remove a user's custom name for a boost.

    Returns True if deleted, False if the boost had no custom name.
    """
    result = await session.execute(
        delete(UserBoostNameDB).where(
            UserBoostNameDB.user_id == user_id,
            UserBoostNameDB.boost_id == boost_id,
        )
    )
    return int(result.rowcount) > 0  # type: ignore[attr-defined]
