"""
Scryfall card translation.

Maps validated Scryfall card payloads onto the flat `cards` table row, and
stored rows back onto the card payload served to the front end.
"""

from typing import Any

from cardsift.models.card import CardPrices, CardResponse
from cardsift.models.db import CardDB
from cardsift.models.scryfall import ScryfallCard, ScryfallCardFace

DEFAULT_RARITY = "common"


def _face_to_dict(face: ScryfallCardFace) -> dict[str, Any]:
    """Flatten a card face, dropping fields Scryfall left out."""
    data: dict[str, Any] = {
        "name": face.name,
        "mana_cost": face.mana_cost,
        "type_line": face.type_line,
        "oracle_text": face.oracle_text,
        "colors": list(face.colors) if face.colors is not None else None,
        "power": face.power,
        "toughness": face.toughness,
        "image_uri_png": face.image_uris.png if face.image_uris else None,
    }
    return {key: value for key, value in data.items() if value is not None}


def _image_png(card: ScryfallCard) -> str | None:
    if card.image_uris and card.image_uris.png:
        return card.image_uris.png

    # Double-faced cards only carry images on their faces
    for face in card.card_faces or []:
        if face.image_uris and face.image_uris.png:
            return face.image_uris.png

    return None


def card_to_row(card: ScryfallCard) -> dict[str, Any]:
    """
    Translate a Scryfall card into `cards` table column values.

    Absent optional fields become None, never an empty string. The result
    never contains interest_rating, is_commander, or timestamps.

    Args:
        card: Validated Scryfall card

    Returns:
        Dict mapping CardDB column names to values
    """
    return {
        "id": card.id,
        "oracle_id": card.oracle_id,
        "name": card.name,
        "mana_cost": card.mana_cost,
        "cmc": card.cmc if card.cmc is not None else 0.0,
        "type_line": card.type_line,
        "oracle_text": card.oracle_text,
        "set_code": card.set,
        "set_name": card.set_name,
        "rarity": card.rarity or DEFAULT_RARITY,
        "image_uri_png": _image_png(card),
        "price_usd": card.prices.usd if card.prices else None,
        "power": card.power,
        "toughness": card.toughness,
        "artist": card.artist,
        "released_at": card.released_at,
        "colors": list(card.colors) if card.colors is not None else None,
        "keywords": list(card.keywords) if card.keywords is not None else None,
        "legalities": dict(card.legalities) if card.legalities else None,
        "card_faces": (
            [_face_to_dict(face) for face in card.card_faces]
            if card.card_faces is not None
            else None
        ),
    }


def row_to_card_response(card: CardDB) -> CardResponse:
    """Convert a stored card to the front-end payload."""
    return CardResponse(
        id=card.id,
        oracle_id=card.oracle_id,
        name=card.name,
        oracle_text=card.oracle_text,
        mana_cost=card.mana_cost,
        type_line=card.type_line,
        image_uri_png=card.image_uri_png,
        prices=CardPrices(usd=card.price_usd) if card.price_usd else None,
        set_name=card.set_name,
        rarity=card.rarity,
        power=card.power,
        toughness=card.toughness,
        artist=card.artist,
        card_faces=card.card_faces,
        interest_rating=card.interest_rating,  # type: ignore[arg-type]
    )
