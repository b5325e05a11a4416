"""
Collection transfer models.

A collection export lists every catalog asset with the user's level and card
count for it, zero where the user does not own it. Importing the same file
restores the user's ownership rows.
"""

from dataclasses import dataclass

from racevault.models.assets import AssetType


@dataclass(frozen=True)
class AssetHolding:
    """
    How far a user has progressed one catalog asset.

    Attributes:
        asset_id: Catalog identifier
        level: Upgrade level, 0 if never upgraded
        card_count: Spare cards held
    """

    asset_id: str
    level: int = 0
    card_count: int = 0

    def is_owned(self, asset_type: AssetType) -> bool:
        """
        Whether this holding represents an owned asset.

        Boosts are never levelled, so only cards count. Drivers and car
        parts count as owned once upgraded or once any card is held.
        """
        if asset_type == "boost":
            return self.card_count > 0
        return self.level > 0 or self.card_count > 0
