"""
Scryfall card search payloads.

These models are the validation boundary for everything fetched from
https://api.scryfall.com/cards/search. Only the fields we store are declared;
anything else Scryfall sends is ignored.

API docs: https://scryfall.com/docs/api/cards/search
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _ScryfallModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ScryfallImageUris(_ScryfallModel):
    png: str | None = None


class ScryfallPrices(_ScryfallModel):
    usd: str | None = None


class ScryfallCardFace(_ScryfallModel):
    """One face of a double-faced, split, or adventure card."""

    name: str
    mana_cost: str | None = None
    type_line: str | None = None
    oracle_text: str | None = None
    colors: list[str] | None = None
    power: str | None = None
    toughness: str | None = None
    image_uris: ScryfallImageUris | None = None


class ScryfallCard(_ScryfallModel):
    """
    A single card printing as returned by Scryfall.

    Attributes:
        id: Scryfall id of this printing (stable, globally unique)
        oracle_id: Shared by every printing of the same card text.
            Absent on some multi-faced layouts, where it lives on the faces.
    """

    id: str
    oracle_id: str | None = None
    name: str
    oracle_text: str | None = None
    mana_cost: str | None = None
    cmc: float | None = None
    type_line: str | None = None
    rarity: str | None = None
    prices: ScryfallPrices | None = None
    colors: list[str] | None = None
    keywords: list[str] | None = None
    set: str | None = None
    set_name: str | None = None
    image_uris: ScryfallImageUris | None = None
    power: str | None = None
    toughness: str | None = None
    card_faces: list[ScryfallCardFace] | None = None
    legalities: dict[str, str] = Field(default_factory=dict)
    artist: str | None = None
    released_at: str | None = None


class ScryfallSearchPage(_ScryfallModel):
    """One page of a Scryfall list response."""

    object: str = "list"
    total_cards: int | None = None
    has_more: bool = False
    next_page: str | None = None
    data: list[ScryfallCard] = Field(default_factory=list)
    warnings: list[Any] | None = None
