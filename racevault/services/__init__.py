"""
RaceVault services.

Business rules applied to content-cache data on its way into the catalog,
and to user collections moving in and out of it.
"""

from racevault.services.change_detection import deep_equal, detect_changes
from racevault.services.collection_transfer import (
    UnknownAssetsError,
    export_collection,
    import_collection,
)
from racevault.services.content_import import import_content_cache, import_records
from racevault.services.remapping import (
    is_se_turbo,
    preprocess_drivers,
    remap_rarity,
    remap_series,
    series_for_tier,
)

__all__ = [
    "UnknownAssetsError",
    "deep_equal",
    "detect_changes",
    "export_collection",
    "import_collection",
    "import_content_cache",
    "import_records",
    "is_se_turbo",
    "preprocess_drivers",
    "remap_rarity",
    "remap_series",
    "series_for_tier",
]
