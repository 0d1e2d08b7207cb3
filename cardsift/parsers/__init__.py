from cardsift.parsers.scryfall import DEFAULT_RARITY, card_to_row, row_to_card_response

__all__ = [
    "DEFAULT_RARITY",
    "card_to_row",
    "row_to_card_response",
]
