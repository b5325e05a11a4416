"""
Import a content-cache export from disk.

Runs the same import as the admin upload endpoint, for use from a shell or
a scheduler:

    python -m racevault.jobs.import_content_cache content_cache.json --seasons 6,7
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from racevault.db.database import admin_session_factory, init_db
from racevault.models.import_result import ContentImportResults
from racevault.parsers.content_cache import (
    ContentCacheError,
    parse_content_cache,
    parse_season_filter,
)
from racevault.services.content_import import import_content_cache

logger = logging.getLogger(__name__)


async def run_import(
    path: Path,
    seasons: str | None = None,
    allow_modifications: bool = False,
) -> ContentImportResults:
    """
    Import one content-cache file.

    Args:
        path: Location of the content_cache.json export
        seasons: Comma-separated season filter; None imports all seasons
        allow_modifications: Write changed records back

    Returns:
        Per entity type import results

    Raises:
        ContentCacheError: If the file is not a valid content cache
        OSError: If the file cannot be read
    """
    logger.info("Reading content cache from %s", path)
    payload = parse_content_cache(path.read_bytes())
    season_filter = parse_season_filter(seasons)

    await init_db()
    # The import commits each write itself
    async with admin_session_factory() as session:
        results = await import_content_cache(
            session, payload, season_filter, allow_modifications
        )

    for entity, result in (
        ("drivers", results.drivers),
        ("car parts", results.car_parts),
        ("boosts", results.boosts),
    ):
        logger.info(
            "%s: %d new, %d modified, %d unchanged",
            entity,
            result.new,
            result.modified,
            result.unchanged,
        )
        for item in result.modified_items:
            logger.info("  %s (%s): %s", item.id, item.name, ", ".join(item.changes))

    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import a game content-cache export")
    parser.add_argument("path", type=Path, help="Path to content_cache.json")
    parser.add_argument(
        "--seasons",
        default=None,
        help="Comma-separated season numbers to import (default: all)",
    )
    parser.add_argument(
        "--allow-modifications",
        action="store_true",
        help="Write changed records back instead of only reporting them",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        asyncio.run(run_import(args.path, args.seasons, args.allow_modifications))
    except (ContentCacheError, OSError) as e:
        logger.error("Import failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
