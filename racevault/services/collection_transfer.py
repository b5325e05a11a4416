"""
Collection export and import.

Players move their progress between accounts, or restore it after a reset,
by exporting their collection and importing the file again. An export lists
every catalog asset, owned or not. An import replaces the user's ownership
rows for each asset type present in the file and leaves other types alone.

Imports are all or nothing: every id is checked against the catalog before
anything is written, and the caller commits once at the end.
"""

import logging
from collections.abc import Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from racevault.db.operations import (
    RECORD_TYPES,
    existing_asset_ids,
    get_user_assets,
    list_asset_ids,
    replace_user_assets,
)
from racevault.models.assets import AssetType
from racevault.models.collection import AssetHolding

logger = logging.getLogger(__name__)


class UnknownAssetsError(ValueError):
    """Raised when an import references ids missing from the catalog."""

    def __init__(self, unknown: dict[AssetType, list[str]]) -> None:
        super().__init__("Collection references assets that are not in the catalog")
        self.unknown = unknown


async def export_collection(
    session: AsyncSession, user_id: str
) -> dict[AssetType, list[AssetHolding]]:
    """
    Export a user's collection.

    Returns:
        Holdings per asset type, one per catalog asset, ordered by name.
        Assets the user does not own have level and card count 0.
    """
    owned = {
        (item.asset_type, item.asset_id): item for item in await get_user_assets(session, user_id)
    }

    export: dict[AssetType, list[AssetHolding]] = {}
    for asset_type in RECORD_TYPES:
        holdings = []
        for asset_id in await list_asset_ids(session, asset_type):
            item = owned.get((asset_type, asset_id))
            if item is None:
                holdings.append(AssetHolding(asset_id))
            else:
                holdings.append(AssetHolding(asset_id, item.level, item.card_count))
        export[asset_type] = holdings

    logger.info(
        "Exported collection for %s: %d owned of %d assets",
        user_id,
        len(owned),
        sum(len(h) for h in export.values()),
    )
    return export


async def import_collection(
    session: AsyncSession,
    user_id: str,
    holdings: Mapping[AssetType, Sequence[AssetHolding]],
) -> dict[AssetType, int]:
    """
    Replace a user's ownership rows from an exported collection.

    Asset types missing from holdings are not touched. Within a type, only
    owned holdings are stored, and a repeated asset id keeps its last entry.

    Returns:
        Number of ownership rows written per imported asset type.

    Raises:
        UnknownAssetsError: If any id is not in the catalog. Nothing is
            written in that case.
    """
    unknown: dict[AssetType, list[str]] = {}
    for asset_type, entries in holdings.items():
        ids = [h.asset_id for h in entries]
        known = await existing_asset_ids(session, asset_type, ids)
        missing = sorted({asset_id for asset_id in ids if asset_id not in known})
        if missing:
            unknown[asset_type] = missing
    if unknown:
        raise UnknownAssetsError(unknown)

    imported: dict[AssetType, int] = {}
    for asset_type, entries in holdings.items():
        latest = {h.asset_id: h for h in entries}
        owned = [h for h in latest.values() if h.is_owned(asset_type)]
        imported[asset_type] = await replace_user_assets(session, user_id, asset_type, owned)

    logger.info("Imported collection for %s: %s", user_id, imported)
    return imported
