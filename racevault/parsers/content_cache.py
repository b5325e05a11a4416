"""
Parser for game content-cache exports.

Supports both export shapes:
- Wrapped: {"_contentResponse": {"drivers": [...], "carparts": [...], "boosts": [...]}}
- Unwrapped: {"drivers": [...], "carparts": [...], "boosts": [...]}

Every entry is validated against a typed model keyed by the export's
camelCase names, so a mistyped field rejects the whole file before anything
is written. The shape is resolved once into ContentSections, and entries are
then mapped into canonical records. Nothing downstream looks at raw export
keys.
"""

import json
import logging
from collections.abc import Collection, Iterable
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from racevault.config import (
    BOOST_DURATION_SECONDS,
    BOOST_NAME_PREFIX,
    MAX_SEASON_NUMBER,
    MIN_SEASON_NUMBER,
)
from racevault.models.assets import BoostRecord, CarPartRecord, DriverRecord

logger = logging.getLogger(__name__)

# Boost stat name -> BoostEntry field holding its tier
BOOST_STAT_KEYS: dict[str, str] = {
    "speed": "speed_tier",
    "block": "block_tier",
    "overtake": "overtake_tier",
    "corners": "corners_tier",
    "tyre_use": "tyre_use_tier",
    "pit_stop": "pit_stop_time_tier",
    "power_unit": "power_unit_tier",
    "race_start": "race_start_tier",
}


class ContentCacheError(ValueError):
    """Raised when an uploaded content cache cannot be read."""

    def __init__(self, message: str, details: list[Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


def _zero_if_null(value: Any) -> Any:
    return 0 if value is None else value


def _empty_if_null(value: Any) -> Any:
    return "" if value is None else value


def _null_if_blank(value: Any) -> Any:
    return None if value == "" else value


def _list_if_null(value: Any) -> Any:
    return [] if value is None else value


# Exports write null for "not set"; these types fold that into the default
Count = Annotated[int, BeforeValidator(_zero_if_null)]
Text = Annotated[str, BeforeValidator(_empty_if_null)]
OptionalText = Annotated[str | None, BeforeValidator(_null_if_blank)]
StatsPerLevel = Annotated[list[Any], BeforeValidator(_list_if_null)]


class ContentEntry(BaseModel):
    """Fields shared by every content-cache entry."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: OptionalText = None
    name: Text = ""
    icon: OptionalText = None
    season: int | None = None


class DriverEntry(ContentEntry):
    """A driver as exported in the content cache."""

    rarity: Count = 0
    series: Count = 0
    ordinal: Count = 0
    cc_price: Count = 0
    num_duplicates_after_unlock: Count = 0
    collection_id: OptionalText = None
    visual_override: OptionalText = None
    collection_sub_name: OptionalText = None
    min_gp_tier: int | None = None
    tag_name: OptionalText = None
    driver_stats_per_level: StatsPerLevel = Field(default_factory=list)


class CarPartEntry(ContentEntry):
    """A car part as exported in the content cache."""

    rarity: Count = 0
    series: Count = 0
    car_part_type: Count = 0
    cc_price: Count = 0
    num_duplicates_after_unlock: Count = 0
    collection_id: OptionalText = None
    visual_override: OptionalText = None
    collection_sub_name: OptionalText = None
    car_part_stats_per_level: StatsPerLevel = Field(default_factory=list)


class BoostEntry(ContentEntry):
    """A boost as exported in the content cache. Stats are exported as tiers."""

    speed_tier: Count = 0
    block_tier: Count = 0
    overtake_tier: Count = 0
    corners_tier: Count = 0
    tyre_use_tier: Count = 0
    pit_stop_time_tier: Count = 0
    power_unit_tier: Count = 0
    race_start_tier: Count = 0


class ContentSections(BaseModel):
    """The three entity arrays of a content cache. Absent arrays are None."""

    model_config = ConfigDict(extra="ignore")

    drivers: list[DriverEntry] | None = None
    carparts: list[CarPartEntry] | None = None
    boosts: list[BoostEntry] | None = None


class ContentCache(ContentSections):
    """A content-cache export in either the wrapped or unwrapped shape."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    content_response: ContentSections | None = Field(default=None, alias="_contentResponse")

    def sections(self) -> ContentSections:
        """Resolve the export shape, preferring wrapped arrays when present."""
        wrapped = self.content_response or ContentSections()
        return ContentSections(
            drivers=wrapped.drivers if wrapped.drivers is not None else self.drivers,
            carparts=wrapped.carparts if wrapped.carparts is not None else self.carparts,
            boosts=wrapped.boosts if wrapped.boosts is not None else self.boosts,
        )


def parse_content_cache(text: str | bytes) -> ContentCache:
    """
    Parse and validate a content-cache export.

    Raises:
        ContentCacheError: If the text is not JSON or does not have the
            content-cache shape.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ContentCacheError("Invalid JSON file") from e

    try:
        return ContentCache.model_validate(data)
    except ValidationError as e:
        raise ContentCacheError(
            "Invalid content cache structure",
            details=e.errors(include_url=False, include_context=False),
        ) from e


def parse_season_filter(value: str | None) -> frozenset[int]:
    """
    Parse a comma-separated season filter like "6, 7".

    Non-numeric and out-of-range entries are ignored. An empty result
    means every season is imported.
    """
    if not value or not value.strip():
        return frozenset()

    seasons: set[int] = set()
    for part in value.split(","):
        try:
            season = int(part.strip())
        except ValueError:
            continue
        if MIN_SEASON_NUMBER <= season <= MAX_SEASON_NUMBER:
            seasons.add(season)
    return frozenset(seasons)


def in_season_filter(entry: ContentEntry, season_filter: Collection[int]) -> bool:
    """Check whether an entry passes the season filter."""
    if not season_filter:
        return True
    return entry.season in season_filter


def boost_display_name(name: str) -> str:
    """Turn an export name like BOOST_NAME_TURBO into "Boost TURBO"."""
    if name.startswith(BOOST_NAME_PREFIX):
        return f"Boost {name[len(BOOST_NAME_PREFIX):]}"
    return name


def _has_id(entry: ContentEntry, kind: str) -> bool:
    if entry.id is None:
        logger.warning("Skipping %s without an id: %s", kind, entry.name)
        return False
    return True


def driver_from_entry(entry: DriverEntry) -> DriverRecord:
    """Map a validated driver entry to a DriverRecord."""
    return DriverRecord(
        id=str(entry.id),
        name=entry.name,
        rarity=entry.rarity,
        series=entry.series,
        ordinal=entry.ordinal,
        icon=entry.icon,
        cc_price=entry.cc_price,
        num_duplicates_after_unlock=entry.num_duplicates_after_unlock,
        collection_id=entry.collection_id,
        visual_override=entry.visual_override,
        collection_sub_name=entry.collection_sub_name,
        min_gp_tier=entry.min_gp_tier,
        tag_name=entry.tag_name,
        stats_per_level=list(entry.driver_stats_per_level),
        season=entry.season,
    )


def car_part_from_entry(entry: CarPartEntry) -> CarPartRecord:
    """Map a validated car part entry to a CarPartRecord."""
    return CarPartRecord(
        id=str(entry.id),
        name=entry.name,
        rarity=entry.rarity,
        series=entry.series,
        car_part_type=entry.car_part_type,
        icon=entry.icon,
        cc_price=entry.cc_price,
        num_duplicates_after_unlock=entry.num_duplicates_after_unlock,
        collection_id=entry.collection_id,
        visual_override=entry.visual_override,
        collection_sub_name=entry.collection_sub_name,
        stats_per_level=list(entry.car_part_stats_per_level),
        season=entry.season,
    )


def boost_from_entry(entry: BoostEntry) -> BoostRecord:
    """Map a validated boost entry to a BoostRecord."""
    stats = {stat: getattr(entry, field) for stat, field in BOOST_STAT_KEYS.items()}
    stats["duration"] = BOOST_DURATION_SECONDS
    return BoostRecord(
        id=str(entry.id),
        name=boost_display_name(entry.name),
        icon=entry.icon,
        boost_stats=stats,
        season=entry.season,
    )


def parse_drivers(
    entries: Iterable[DriverEntry], season_filter: Collection[int] = ()
) -> list[DriverRecord]:
    """Filter drivers by season and map them to records."""
    return [
        driver_from_entry(entry)
        for entry in entries
        if in_season_filter(entry, season_filter) and _has_id(entry, "driver")
    ]


def parse_car_parts(
    entries: Iterable[CarPartEntry], season_filter: Collection[int] = ()
) -> list[CarPartRecord]:
    """Filter car parts by season and map them to records."""
    return [
        car_part_from_entry(entry)
        for entry in entries
        if in_season_filter(entry, season_filter) and _has_id(entry, "car part")
    ]


def parse_boosts(
    entries: Iterable[BoostEntry], season_filter: Collection[int] = ()
) -> list[BoostRecord]:
    """
    Map boosts to records.

    Most exports carry no season on boosts; those are always kept. Boosts
    that do carry one go through the season filter like any other entry.
    """
    return [
        boost_from_entry(entry)
        for entry in entries
        if (entry.season is None or in_season_filter(entry, season_filter))
        and _has_id(entry, "boost")
    ]
