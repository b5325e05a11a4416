"""
Content-cache import with change detection.

Takes a validated content-cache export and brings the catalog tables in line
with it, one entity type at a time:

- new ids are inserted
- known ids are compared field by field; differences are reported and,
  when modifications are allowed, written back
- identical records are left alone

The import is best effort. A failed lookup skips its entity type, a failed
write skips its record, and every successful write is committed on its own,
so an interrupted import keeps whatever it already wrote. Re-running the same
file is safe because writes are keyed by id.
"""

import logging
from collections.abc import Awaitable, Callable, Collection, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.config import SE_TURBO_RARITY
from racevault.db.operations import fetch_existing_assets, insert_asset, update_asset
from racevault.models.assets import AssetRecord
from racevault.models.import_result import ContentImportResults, ImportResult, ModifiedItem
from racevault.parsers.content_cache import (
    ContentCache,
    parse_boosts,
    parse_car_parts,
    parse_drivers,
)
from racevault.services.change_detection import detect_changes
from racevault.services.remapping import preprocess_drivers

logger = logging.getLogger(__name__)

WriteOperation = Callable[[AsyncSession, AssetRecord], Awaitable[None]]


async def _write(
    session: AsyncSession,
    operation: WriteOperation,
    record: AssetRecord,
    action: str,
) -> bool:
    """Run one insert or update and commit it. Returns False if it failed."""
    try:
        await operation(session, record)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            "Failed to %s %s %s (%s): %s",
            action,
            type(record).__name__,
            record.id,
            record.name,
            e,
        )
        return False
    return True


async def import_records(
    session: AsyncSession,
    records: Sequence[AssetRecord],
    allow_modifications: bool = False,
) -> ImportResult:
    """
    Classify records against the database and write what needs writing.

    All records must be of the same type.

    Args:
        session: Database session used for every read and write
        records: Canonical records, already remapped
        allow_modifications: Write changed records back instead of only
            reporting them

    Returns:
        Counts of new, modified and unchanged records
    """
    result = ImportResult()
    if not records:
        return result

    record_type = type(records[0])
    try:
        existing = await fetch_existing_assets(session, record_type, (r.id for r in records))
    except SQLAlchemyError as e:
        logger.warning("Failed to fetch existing %s records: %s", record_type.__name__, e)
        await session.rollback()
        return result

    for record in records:
        stored = existing.get(record.id)

        if stored is None:
            if await _write(session, insert_asset, record, "insert"):
                result.new += 1
                existing[record.id] = record
            continue

        changes = detect_changes(stored, record)
        if not changes:
            result.unchanged += 1
            continue

        if allow_modifications:
            if not await _write(session, update_asset, record, "update"):
                continue
            existing[record.id] = record
            logger.info("Updated %s %s (%s)", record_type.__name__, record.id, record.name)

        result.modified += 1
        result.modified_items.append(ModifiedItem(id=record.id, name=record.name, changes=changes))

    return result


async def import_content_cache(
    session: AsyncSession,
    payload: ContentCache,
    season_filter: Collection[int] = frozenset(),
    allow_modifications: bool = False,
) -> ContentImportResults:
    """
    Import drivers, car parts and boosts from a content-cache export.

    Args:
        session: Database session owned by the caller
        payload: Validated export in either shape
        season_filter: Seasons to import; empty imports every season
        allow_modifications: Write changed records back instead of only
            reporting them

    Returns:
        Per entity type import results
    """
    sections = payload.sections()
    results = ContentImportResults()

    if sections.drivers is not None:
        drivers = preprocess_drivers(parse_drivers(sections.drivers, season_filter))
        turbo_count = sum(1 for d in drivers if d.rarity == SE_TURBO_RARITY)
        logger.info("Importing %d drivers (%d SE Turbo)", len(drivers), turbo_count)
        results.drivers = await import_records(session, drivers, allow_modifications)

    if sections.carparts is not None:
        car_parts = parse_car_parts(sections.carparts, season_filter)
        logger.info("Importing %d car parts", len(car_parts))
        results.car_parts = await import_records(session, car_parts, allow_modifications)

    if sections.boosts is not None:
        boosts = parse_boosts(sections.boosts, season_filter)
        logger.info("Importing %d boosts", len(boosts))
        results.boosts = await import_records(session, boosts, allow_modifications)

    logger.info(
        "Content cache import complete: %d new, %d modified, %d unchanged",
        results.total_new(),
        results.total_modified(),
        results.total_unchanged(),
    )
    return results
