from racevault.models.assets import (
    AssetRecord,
    AssetType,
    BoostRecord,
    CarPartRecord,
    DriverRecord,
)
from racevault.models.collection import AssetHolding
from racevault.models.import_result import ContentImportResults, ImportResult, ModifiedItem

__all__ = [
    "AssetHolding",
    "AssetRecord",
    "AssetType",
    "BoostRecord",
    "CarPartRecord",
    "ContentImportResults",
    "DriverRecord",
    "ImportResult",
    "ModifiedItem",
]
