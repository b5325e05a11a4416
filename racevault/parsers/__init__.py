from racevault.parsers.content_cache import (
    BoostEntry,
    CarPartEntry,
    ContentCache,
    ContentCacheError,
    ContentSections,
    DriverEntry,
    parse_boosts,
    parse_car_parts,
    parse_content_cache,
    parse_drivers,
    parse_season_filter,
)

__all__ = [
    "BoostEntry",
    "CarPartEntry",
    "ContentCache",
    "ContentCacheError",
    "ContentSections",
    "DriverEntry",
    "parse_boosts",
    "parse_car_parts",
    "parse_content_cache",
    "parse_drivers",
    "parse_season_filter",
]
