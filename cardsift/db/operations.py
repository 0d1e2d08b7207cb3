"""
Database CRUD operations.

Provides async functions for reading and writing stored cards and their
interest ratings. Callers own the session and decide when to commit.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cardsift.models.db import CardDB

# --- Card Operations ---


async def get_card(session: AsyncSession, card_id: str) -> CardDB | None:
    """
    Get a card by its Scryfall id.

    Returns None if no card exists with this id.
    """
    result = await session.execute(select(CardDB).where(CardDB.id == card_id))
    return result.scalar_one_or_none()


async def insert_card(session: AsyncSession, row: dict[str, Any]) -> CardDB:
    """
    Insert a newly synced card.

    New cards start unrated and flagged as commanders.
    Raises IntegrityError if the id already exists.
    """
    card = CardDB(**row, interest_rating=None, is_commander=True)
    session.add(card)
    await session.flush()
    return card


async def update_card(session: AsyncSession, card: CardDB, row: dict[str, Any]) -> CardDB:
    """
    Overwrite a stored card with freshly synced fields.

    interest_rating is not part of a synced row and is left as it was.
    """
    for column, value in row.items():
        setattr(card, column, value)
    card.updated_at = datetime.now(UTC)
    await session.flush()
    return card


async def upsert_card(session: AsyncSession, row: dict[str, Any]) -> tuple[CardDB, bool]:
    """
    Insert or update a card keyed by row["id"].

    Returns:
        Tuple of (card, created) where created is True if inserted.
    """
    existing = await get_card(session, row["id"])
    if existing:
        return await update_card(session, existing, row), False

    return await insert_card(session, row), True


async def delete_all_cards(session: AsyncSession) -> int:
    """
    Delete every stored card.

    Returns the number of deleted records.
    """
    result = await session.execute(delete(CardDB))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]


# --- Rating Operations ---


async def set_card_rating(session: AsyncSession, card_id: str, rating: str | None) -> bool:
    """
    Set or clear a card's interest rating.

    Returns True if the card exists, False otherwise.
    """
    result = await session.execute(
        update(CardDB)
        .where(CardDB.id == card_id)
        .values(interest_rating=rating, updated_at=datetime.now(UTC))
    )
    return bool(result.rowcount)  # type: ignore[attr-defined]


async def clear_ratings(session: AsyncSession) -> int:
    """
    Reset every card's rating to unset. Rows are kept.

    Returns the number of cards that had a rating.
    """
    result = await session.execute(
        update(CardDB).where(CardDB.interest_rating.is_not(None)).values(interest_rating=None)
    )
    return int(result.rowcount)  # type: ignore[attr-defined]


def _rating_clause(rating_filter: str | None) -> list[Any]:
    clauses: list[Any] = [CardDB.is_commander.is_(True)]
    if rating_filter == "unrated":
        clauses.append(CardDB.interest_rating.is_(None))
    elif rating_filter is not None:
        clauses.append(CardDB.interest_rating == rating_filter)
    return clauses


async def get_random_card(session: AsyncSession, rating_filter: str | None = None) -> CardDB | None:
    """
    Pick one commander card at random, using the database's random ordering.

    Args:
        rating_filter: "interesting", "not_interesting", "unrated", or None for any card
    """
    result = await session.execute(
        select(CardDB).where(*_rating_clause(rating_filter)).order_by(func.random()).limit(1)
    )
    return result.scalar_one_or_none()


async def get_cards_by_rating(session: AsyncSession, rating: str) -> list[CardDB]:
    """Get all commander cards with the given rating, ordered by name."""
    result = await session.execute(
        select(CardDB).where(*_rating_clause(rating)).order_by(CardDB.name.asc())
    )
    return list(result.scalars().all())


async def count_commander_cards(session: AsyncSession) -> int:
    result = await session.execute(
        select(func.count()).select_from(CardDB).where(CardDB.is_commander.is_(True))
    )
    return int(result.scalar_one())


async def count_cards_by_rating(session: AsyncSession) -> dict[str | None, int]:
    """
    Count commander cards grouped by rating.

    Returns a mapping of rating (None for unrated) to card count.
    """
    result = await session.execute(
        select(CardDB.interest_rating, func.count())
        .where(CardDB.is_commander.is_(True))
        .group_by(CardDB.interest_rating)
    )
    return {rating: int(count) for rating, count in result.all()}


async def get_rated_cards(session: AsyncSession) -> list[tuple[str, str]]:
    """Get (id, rating) for every card that has a rating."""
    result = await session.execute(
        select(CardDB.id, CardDB.interest_rating)
        .where(CardDB.interest_rating.is_not(None))
        .order_by(CardDB.id)
    )
    return [(card_id, rating) for card_id, rating in result.all()]
