"""Tests for database CRUD operations."""

from conftest import make_card
from sqlalchemy.ext.asyncio import AsyncSession

from cardsift.db.operations import (
    clear_ratings,
    count_cards_by_rating,
    count_commander_cards,
    delete_all_cards,
    get_card,
    get_cards_by_rating,
    get_random_card,
    get_rated_cards,
    set_card_rating,
    upsert_card,
)
from cardsift.parsers.scryfall import card_to_row


async def _store(session: AsyncSession, *entries: tuple[str, str]) -> None:
    for card_id, name in entries:
        await upsert_card(session, card_to_row(make_card(card_id, name)))
    await session.commit()


class TestCardOperations:
    async def test_upsert_inserts_new_card(self, session: AsyncSession) -> None:
        card, created = await upsert_card(session, card_to_row(make_card("c1", "Krenko")))
        await session.commit()

        assert created is True
        assert card.is_commander is True
        assert card.interest_rating is None

    async def test_upsert_updates_existing_card(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "Krenko"))

        card, created = await upsert_card(
            session, card_to_row(make_card("c1", "Krenko, Mob Boss", prices={"usd": "3.50"}))
        )
        await session.commit()

        assert created is False
        assert card.name == "Krenko, Mob Boss"
        assert card.price_usd == "3.50"
        assert await count_commander_cards(session) == 1

    async def test_get_card_not_found(self, session: AsyncSession) -> None:
        assert await get_card(session, "missing") is None

    async def test_delete_all_cards(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "A"), ("c2", "B"))

        deleted = await delete_all_cards(session)
        await session.commit()

        assert deleted == 2
        assert await count_commander_cards(session) == 0


class TestRatingOperations:
    async def test_set_rating_on_missing_card(self, session: AsyncSession) -> None:
        assert await set_card_rating(session, "missing", "interesting") is False

    async def test_set_and_clear_rating(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "A"))

        assert await set_card_rating(session, "c1", "interesting") is True
        await session.commit()
        assert (await get_card(session, "c1")).interest_rating == "interesting"

        await set_card_rating(session, "c1", None)
        await session.commit()
        assert (await get_card(session, "c1")).interest_rating is None

    async def test_clear_ratings_keeps_rows(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "A"), ("c2", "B"), ("c3", "C"))
        await set_card_rating(session, "c1", "interesting")
        await set_card_rating(session, "c2", "not_interesting")
        await session.commit()

        cleared = await clear_ratings(session)
        await session.commit()

        assert cleared == 2
        assert await count_commander_cards(session) == 3
        assert await get_rated_cards(session) == []

    async def test_count_by_rating(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "A"), ("c2", "B"), ("c3", "C"), ("c4", "D"))
        await set_card_rating(session, "c1", "interesting")
        await set_card_rating(session, "c2", "interesting")
        await set_card_rating(session, "c3", "not_interesting")
        await session.commit()

        counts = await count_cards_by_rating(session)

        assert counts == {"interesting": 2, "not_interesting": 1, None: 1}

    async def test_cards_by_rating_sorted_by_name(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "Zur"), ("c2", "Atraxa"), ("c3", "Marchesa"))
        for card_id in ("c1", "c2", "c3"):
            await set_card_rating(session, card_id, "interesting")
        await session.commit()

        cards = await get_cards_by_rating(session, "interesting")

        assert [c.name for c in cards] == ["Atraxa", "Marchesa", "Zur"]

    async def test_random_card_unrated_filter(self, session: AsyncSession) -> None:
        await _store(session, ("c1", "A"), ("c2", "B"))
        await set_card_rating(session, "c1", "interesting")
        await session.commit()

        for _ in range(10):
            card = await get_random_card(session, "unrated")
            assert card is not None
            assert card.id == "c2"

    async def test_random_card_empty_table(self, session: AsyncSession) -> None:
        assert await get_random_card(session) is None
