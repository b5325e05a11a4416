"""
Results of a content-cache import.

Counts are kept per entity type so the upload response and the CLI job can
report drivers, car parts and boosts separately as well as in total.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ModifiedItem:
    """A stored asset whose imported version differs."""

    id: str
    name: str
    changes: list[str] = field(default_factory=list)


@dataclass
class ImportResult:
    """
    Outcome of importing one entity type.

    Every processed record lands in exactly one of new, modified or unchanged,
    except records whose write failed, which land in none.
    """

    new: int = 0
    modified: int = 0
    unchanged: int = 0
    modified_items: list[ModifiedItem] = field(default_factory=list)

    def processed(self) -> int:
        """Number of records that were classified."""
        return self.new + self.modified + self.unchanged

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "new": self.new,
            "modified": self.modified,
            "unchanged": self.unchanged,
            "modified_items": [
                {"id": item.id, "name": item.name, "changes": list(item.changes)}
                for item in self.modified_items
            ],
        }


@dataclass
class ContentImportResults:
    """Per entity type results of one content-cache import."""

    drivers: ImportResult = field(default_factory=ImportResult)
    car_parts: ImportResult = field(default_factory=ImportResult)
    boosts: ImportResult = field(default_factory=ImportResult)

    def _all(self) -> tuple[ImportResult, ImportResult, ImportResult]:
        return self.drivers, self.car_parts, self.boosts

    def total_new(self) -> int:
        """New records across entity types."""
        return sum(r.new for r in self._all())

    def total_modified(self) -> int:
        """Modified records across entity types."""
        return sum(r.modified for r in self._all())

    def total_unchanged(self) -> int:
        """Unchanged records across entity types."""
        return sum(r.unchanged for r in self._all())

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Per entity type results keyed as in the upload response."""
        return {
            "drivers": self.drivers.to_dict(),
            "car_parts": self.car_parts.to_dict(),
            "boosts": self.boosts.to_dict(),
        }

    def summary(self) -> dict[str, Any]:
        """Totals across entity types, plus the per-type breakdown."""
        return {
            "total_new": self.total_new(),
            "total_modified": self.total_modified(),
            "total_unchanged": self.total_unchanged(),
            "total_processed": sum(r.processed() for r in self._all()),
            **self.to_dict(),
        }
