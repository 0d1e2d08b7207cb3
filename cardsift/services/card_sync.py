"""
Card sync and rating service.

Pulls commander-legal paper cards from Scryfall into the local `cards` table
and manages the user's interest ratings on them.

Every public function takes the session it works on and returns a result
model rather than raising: callers check `success`.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardsift.config import settings
from cardsift.db import operations
from cardsift.models.card import (
    VALID_RATING_FILTERS,
    VALID_RATINGS,
    CardStats,
    ImportResult,
    OperationResult,
    RatingEntry,
    RatingsExport,
    SyncProgress,
    SyncResult,
    SyncStats,
)
from cardsift.models.db import CardDB
from cardsift.models.failure import (
    ApiError,
    FailureKind,
    InputValidationError,
    NetworkError,
    PersistenceError,
)
from cardsift.models.scryfall import ScryfallCard
from cardsift.parsers.scryfall import card_to_row
from cardsift.services.scryfall_search import fetch_all, prepare_query

logger = logging.getLogger(__name__)

ProgressHook = Callable[[SyncProgress], Awaitable[None] | None]


# --- Sync ---


async def _persist_card(session: AsyncSession, card: ScryfallCard) -> bool:
    """
    Upsert and commit a single card.

    Returns True if the card was inserted, False if updated.

    Raises:
        PersistenceError: If the write fails. The session is rolled back.
    """
    try:
        _, created = await operations.upsert_card(session, card_to_row(card))
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise PersistenceError(card.id, f"Failed to store card {card.name}", detail=str(e)) from e
    return created


async def _notify(progress_hook: ProgressHook, progress: SyncProgress) -> None:
    try:
        result = progress_hook(progress)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.warning("Progress hook failed at %s: %s", progress.current_card, e)


async def reconcile(
    session: AsyncSession,
    records: Sequence[ScryfallCard],
    progress_hook: ProgressHook | None = None,
) -> SyncStats:
    """
    Store fetched cards, one at a time, in input order.

    Existing cards (matched by Scryfall id) are overwritten except for their
    interest rating; new cards are inserted unrated. A card that fails to
    store is logged and counted in `failed`, and the run continues.

    Args:
        session: Session on the target store
        records: Cards from fetch_all
        progress_hook: Optional callable (sync or async) notified after each card.
            Its failures are logged and ignored.

    Returns:
        SyncStats where total = added + updated
    """
    stats = SyncStats()
    expected = len(records)

    for processed, card in enumerate(records, start=1):
        try:
            created = await _persist_card(session, card)
        except PersistenceError as e:
            logger.error("Error processing card %s (%s): %s", card.name, e.card_id, e.detail)
            stats.failed += 1
        else:
            if created:
                stats.added += 1
            else:
                stats.updated += 1
            stats.total += 1

        if progress_hook is not None:
            await _notify(
                progress_hook,
                SyncProgress(processed=processed, total=expected, current_card=card.name),
            )

    return stats


async def sync_commander_cards(
    session: AsyncSession,
    progress_hook: ProgressHook | None = None,
    client: httpx.AsyncClient | None = None,
    query: str | None = None,
) -> SyncResult:
    """
    Fetch every commander-legal paper card from Scryfall and store it.

    Args:
        session: Session on the target store
        progress_hook: Optional per-card progress callable
        client: Optional httpx client for connection reuse
        query: Search predicate. Defaults to settings.sync_query

    Returns:
        SyncResult; success is False when fetching failed
    """
    url = prepare_query(query or settings.sync_query)
    logger.info("Fetching cards from %s", url)

    try:
        records = await fetch_all(url, client=client)
    except (NetworkError, ApiError) as e:
        logger.error("Card sync aborted (%s): %s", e.kind.value, e.message)
        return SyncResult(success=False, message=f"Sync failed: {e.message}")

    logger.info("Fetched %d cards, updating database...", len(records))
    stats = await reconcile(session, records, progress_hook)

    message = (
        f"Sync completed! Added {stats.added} new cards, "
        f"updated {stats.updated} existing cards. "
        f"Total: {stats.total} cards processed."
    )
    if stats.failed:
        message += f" {stats.failed} cards failed."
    logger.info("%s", message)

    return SyncResult(success=True, message=message, stats=stats)


# --- Ratings ---


def validate_rating(rating: Any) -> str | None:
    """
    Check a rating value supplied by a caller.

    Raises:
        InputValidationError: Unless rating is "interesting", "not_interesting", or None
    """
    if rating is not None and (not isinstance(rating, str) or rating not in VALID_RATINGS):
        raise InputValidationError("Invalid rating value")
    return rating  # type: ignore[no-any-return]


def validate_card_id(card_id: Any) -> str:
    """
    Raises:
        InputValidationError: If card_id is missing or blank
    """
    if not isinstance(card_id, str) or not card_id.strip():
        raise InputValidationError("Card ID is required")
    return card_id.strip()


async def rate_card(session: AsyncSession, card_id: str, rating: str | None) -> OperationResult:
    """
    Mark a card as interesting, not interesting, or unrated (None).
    """
    try:
        card_id = validate_card_id(card_id)
        rating = validate_rating(rating)
    except InputValidationError as e:
        return OperationResult(success=False, message=e.message, failure=e.kind)

    try:
        found = await operations.set_card_rating(session, card_id, rating)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Error rating card %s: %s", card_id, e)
        return OperationResult(
            success=False,
            message="Failed to rate card",
            failure=FailureKind.PERSISTENCE_ERROR,
        )

    if not found:
        return OperationResult(
            success=False, message="Card not found", failure=FailureKind.NOT_FOUND
        )

    return OperationResult(success=True, message=f"Card marked as {rating or 'unrated'}")


async def get_random_card(session: AsyncSession, rating_filter: str | None = None) -> CardDB | None:
    """
    Pick a random commander card, optionally restricted by rating.

    Args:
        rating_filter: "interesting", "not_interesting", "unrated", or None for any

    Returns None, without querying, for any other filter value.
    """
    if rating_filter is not None and rating_filter not in VALID_RATING_FILTERS:
        logger.warning("Rejected rating filter %r", rating_filter)
        return None

    try:
        return await operations.get_random_card(session, rating_filter)
    except SQLAlchemyError as e:
        logger.error("Error fetching random card: %s", e)
        return None


async def get_commander_card_count(session: AsyncSession) -> int:
    try:
        return await operations.count_commander_cards(session)
    except SQLAlchemyError:
        logger.info("Cards table not available, returning 0")
        return 0


async def get_card_stats(session: AsyncSession) -> CardStats:
    """Count stored commander cards by rating."""
    try:
        counts = await operations.count_cards_by_rating(session)
    except SQLAlchemyError:
        logger.info("Cards table not available, returning empty stats")
        return CardStats()

    return CardStats(
        total=sum(counts.values()),
        interesting=counts.get("interesting", 0),
        not_interesting=counts.get("not_interesting", 0),
        unrated=counts.get(None, 0),
    )


async def get_cards_by_rating(session: AsyncSession, rating: str) -> list[CardDB]:
    """
    Get every commander card with the given rating, sorted by name.

    Returns an empty list, without querying, for any other rating value.
    """
    if rating not in VALID_RATINGS:
        logger.warning("Rejected rating %r", rating)
        return []

    try:
        return await operations.get_cards_by_rating(session, rating)
    except SQLAlchemyError as e:
        logger.error("Error fetching cards by rating: %s", e)
        return []


# --- Bulk maintenance ---


async def clear_all_cards(session: AsyncSession) -> OperationResult:
    """Remove every stored card."""
    try:
        deleted = await operations.delete_all_cards(session)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Clear database error: %s", e)
        return OperationResult(success=False, message="Failed to clear database")

    logger.info("Deleted %d cards", deleted)
    return OperationResult(
        success=True,
        message="Database cleared successfully. All cards have been removed.",
    )


async def clear_all_ratings(session: AsyncSession) -> OperationResult:
    """Reset every card to unrated without deleting any card."""
    try:
        cleared = await operations.clear_ratings(session)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Clear progress error: %s", e)
        return OperationResult(success=False, message="Failed to clear progress")

    logger.info("Cleared %d ratings", cleared)
    return OperationResult(
        success=True,
        message="Progress cleared successfully. All card ratings have been removed.",
    )


async def export_ratings(session: AsyncSession) -> RatingsExport:
    """Export (id, rating) for every rated card."""
    try:
        rated = await operations.get_rated_cards(session)
    except SQLAlchemyError as e:
        logger.error("Export error: %s", e)
        return RatingsExport(success=False)

    ratings = [
        RatingEntry(id=card_id, interest_rating=rating)  # type: ignore[arg-type]
        for card_id, rating in rated
    ]
    return RatingsExport(success=True, ratings=ratings, count=len(ratings))


async def import_ratings(session: AsyncSession, ratings: Iterable[dict[str, Any]]) -> ImportResult:
    """
    Apply previously exported ratings to cards already in the store.

    Never inserts cards. Entries without an id or rating, with an invalid
    rating, or naming a card that is not stored are counted as errors.
    """
    updated = 0
    errors = 0

    for entry in ratings:
        try:
            card_id = validate_card_id(entry.get("id"))
            rating = entry.get("interest_rating")
            if rating is None:
                raise InputValidationError("Rating is required")
            validate_rating(rating)
        except (AttributeError, InputValidationError):
            errors += 1
            continue

        try:
            found = await operations.set_card_rating(session, card_id, rating)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Error importing rating for %s: %s", card_id, e)
            errors += 1
            continue

        if found:
            updated += 1
        else:
            errors += 1

    message = f"Import completed. Updated: {updated}"
    if errors:
        message += f", Errors/Skipped: {errors}"

    return ImportResult(success=True, message=message, updated=updated, errors=errors)
