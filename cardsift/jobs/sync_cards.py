"""
Sync commander cards from Scryfall.

Run this job to populate or refresh the local card table without the web app.

Usage:
    python -m cardsift.jobs.sync_cards
    python -m cardsift.jobs.sync_cards --query "is:commander game:paper legal:commander c:g"
"""

import argparse
import asyncio
import logging
import sys

from cardsift.db.database import async_session_factory, engine, initialize_database
from cardsift.models.card import SyncProgress, SyncResult
from cardsift.services.card_sync import sync_commander_cards

logger = logging.getLogger(__name__)

PROGRESS_LOG_INTERVAL = 100


def log_progress(progress: SyncProgress) -> None:
    """Log every PROGRESS_LOG_INTERVAL cards and at the end."""
    if progress.processed % PROGRESS_LOG_INTERVAL == 0 or progress.processed == progress.total:
        logger.info(
            "Processed %d/%d cards (%s)",
            progress.processed,
            progress.total,
            progress.current_card,
        )


async def run_sync(query: str | None = None, init_only: bool = False) -> SyncResult:
    """
    Initialize the database and sync cards.

    Args:
        query: Scryfall search predicate. Defaults to the configured commander query
        init_only: Only create the schema, do not contact Scryfall

    Returns:
        SyncResult of the run
    """
    init_result = await initialize_database(engine)
    logger.info("%s", init_result.message)
    if not init_result.success or init_only:
        return SyncResult(success=init_result.success, message=init_result.message)

    async with async_session_factory() as session:
        result = await sync_commander_cards(session, progress_hook=log_progress, query=query)

    if result.success:
        logger.info("%s", result.message)
    else:
        logger.error("%s", result.message)
    return result


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Sync commander cards from Scryfall")
    parser.add_argument(
        "--query",
        default=None,
        help="Scryfall search predicate (default: commander-legal paper commanders)",
    )
    parser.add_argument(
        "--init-only",
        action="store_true",
        help="Create the database schema and exit",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    result = asyncio.run(run_sync(query=args.query, init_only=args.init_only))
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
