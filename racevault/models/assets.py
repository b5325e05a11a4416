"""
Canonical asset records.

Every content-cache entry is normalized into one of these records before any
remapping, comparison or persistence happens. Stored rows are converted back
into the same record types so that imported and stored data compare field by
field.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

AssetType = Literal["driver", "car_part", "boost"]


@dataclass(frozen=True)
class DriverRecord:
    """
    A driver card.

    Attributes:
        id: External content-cache identifier
        name: Localization key or display name
        rarity: Rarity tier (5 = Special Edition, 6 = SE Turbo)
        series: Progression series the driver belongs to
        min_gp_tier: Lowest Grand Prix tier the driver is relevant for
        collection_sub_name: Variant tag, used to spot SE Turbo drivers
        stats_per_level: Per-level stat blocks, passed through as exported
        season: Season number the driver was released in
    """

    id: str
    name: str
    rarity: int = 0
    series: int = 0
    ordinal: int = 0
    icon: str | None = None
    cc_price: int = 0
    num_duplicates_after_unlock: int = 0
    collection_id: str | None = None
    visual_override: str | None = None
    collection_sub_name: str | None = None
    min_gp_tier: int | None = None
    tag_name: str | None = None
    stats_per_level: list[Any] = field(default_factory=list)
    season: int | None = None


@dataclass(frozen=True)
class CarPartRecord:
    """A car part card (brakes, gearbox, rear wing, ...)."""

    id: str
    name: str
    rarity: int = 0
    series: int = 0
    car_part_type: int = 0
    icon: str | None = None
    cc_price: int = 0
    num_duplicates_after_unlock: int = 0
    collection_id: str | None = None
    visual_override: str | None = None
    collection_sub_name: str | None = None
    stats_per_level: list[Any] = field(default_factory=list)
    season: int | None = None


@dataclass(frozen=True)
class BoostRecord:
    """A boost with its stat tiers gathered into one mapping."""

    id: str
    name: str
    icon: str | None = None
    boost_stats: dict[str, int] = field(default_factory=dict)
    season: int | None = None


AssetRecord = DriverRecord | CarPartRecord | BoostRecord
