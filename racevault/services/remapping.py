"""
Rarity and series remapping for imported cards.

The content cache exports Special Edition Turbo drivers with the same rarity
as regular Special Edition drivers, and exports a series value for
legendary-and-above cards that does not match where they sit on the
competitive ladder. These rules rewrite both before the records are compared
against or written to the database.

Order matters: rarity is finalized first because the series rule keys off
the remapped rarity.
"""

import dataclasses
import logging
from collections.abc import Iterable
from typing import TypeVar

from racevault.config import (
    SE_TURBO_RARITY,
    SERIES_REMAP_MIN_RARITY,
    SPECIAL_EDITION_RARITY,
    TURBO_SUB_NAME_SUFFIX,
)
from racevault.models.assets import CarPartRecord, DriverRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", DriverRecord, CarPartRecord)

# Min GP tier -> series (Junior, Challenger, Contender, Champion)
TIER_TO_SERIES: dict[int, int] = {0: 3, 1: 6, 2: 9, 3: 12}
CHAMPION_TIER = 3
DEFAULT_SERIES = 3


def is_se_turbo(record: DriverRecord | CarPartRecord) -> bool:
    """Check whether a record is a Special Edition Turbo variant."""
    sub_name = record.collection_sub_name
    return (
        record.rarity == SPECIAL_EDITION_RARITY
        and sub_name is not None
        and sub_name.endswith(TURBO_SUB_NAME_SUFFIX)
    )


def series_for_tier(min_gp_tier: int | None) -> int:
    """
    Series a legendary-or-better card belongs to, given its min GP tier.

    Tiers above Champion map to Champion. Unknown tiers map to Junior.
    """
    if min_gp_tier is None:
        return DEFAULT_SERIES
    if min_gp_tier >= CHAMPION_TIER:
        return TIER_TO_SERIES[CHAMPION_TIER]
    return TIER_TO_SERIES.get(min_gp_tier, DEFAULT_SERIES)


def remap_rarity(record: RecordT) -> RecordT:
    """Promote SE Turbo records from rarity 5 to rarity 6."""
    if not is_se_turbo(record):
        return record

    logger.debug("SE Turbo driver %s (%s): rarity 5 -> 6", record.id, record.name)
    return dataclasses.replace(record, rarity=SE_TURBO_RARITY)


def remap_series(record: RecordT) -> RecordT:
    """
    Derive series from min GP tier for rarity 4 and above.

    Records below rarity 4 keep the series they were exported with.
    """
    if record.rarity < SERIES_REMAP_MIN_RARITY:
        return record

    # Car parts have no tier; they fall back to the default series
    tier = getattr(record, "min_gp_tier", None)
    return dataclasses.replace(record, series=series_for_tier(tier))


def preprocess_drivers(drivers: Iterable[DriverRecord]) -> list[DriverRecord]:
    """Apply rarity remapping, then series remapping, to every driver."""
    return [remap_series(remap_rarity(driver)) for driver in drivers]
