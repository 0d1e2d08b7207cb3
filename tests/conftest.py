from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardsift.models.db import Base
from cardsift.models.scryfall import ScryfallCard

SEARCH_URL = "https://api.scryfall.com/cards/search"


def make_card_json(card_id: str, name: str, **overrides: Any) -> dict[str, Any]:
    """Build a Scryfall card payload with the fields a real response carries."""
    card: dict[str, Any] = {
        "object": "card",
        "id": card_id,
        "oracle_id": f"oracle-{card_id}",
        "name": name,
        "lang": "en",
        "released_at": "2022-09-09",
        "mana_cost": "{2}{B}{B}",
        "cmc": 4.0,
        "type_line": "Legendary Creature — Phyrexian Praetor",
        "oracle_text": "Deathtouch\nWhenever an opponent draws a card, they lose 2 life.",
        "power": "4",
        "toughness": "5",
        "colors": ["B"],
        "keywords": ["Deathtouch"],
        "legalities": {"commander": "legal", "standard": "legal", "modern": "legal"},
        "set": "dmu",
        "set_name": "Dominaria United",
        "rarity": "mythic",
        "artist": "Chris Rahn",
        "image_uris": {"png": f"https://cards.scryfall.io/png/front/{card_id}.png"},
        "prices": {"usd": "79.99", "usd_foil": "95.00", "eur": None},
    }
    card.update(overrides)
    return card


def make_card(card_id: str, name: str, **overrides: Any) -> ScryfallCard:
    return ScryfallCard.model_validate(make_card_json(card_id, name, **overrides))


def make_page(
    cards: list[dict[str, Any]],
    next_page: str | None = None,
    total_cards: int | None = None,
) -> dict[str, Any]:
    """Build a Scryfall list response page."""
    page: dict[str, Any] = {
        "object": "list",
        "total_cards": total_cards if total_cards is not None else len(cards),
        "has_more": next_page is not None,
        "data": cards,
    }
    if next_page is not None:
        page["next_page"] = next_page
    return page


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def sample_cards() -> list[ScryfallCard]:
    return [
        make_card("c1", "Sheoldred, the Apocalypse"),
        make_card("c2", "Atraxa, Praetors' Voice", rarity="mythic", colors=["W", "U", "B", "G"]),
        make_card("c3", "Krenko, Mob Boss", rarity="rare", colors=["R"]),
    ]
