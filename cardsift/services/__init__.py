"""
cardsift services.

Scryfall fetching, card sync, and rating management.
"""

from cardsift.services.card_sync import (
    ProgressHook,
    clear_all_cards,
    clear_all_ratings,
    export_ratings,
    get_card_stats,
    get_cards_by_rating,
    get_commander_card_count,
    get_random_card,
    import_ratings,
    rate_card,
    reconcile,
    sync_commander_cards,
)
from cardsift.services.scryfall_search import fetch_all, fetch_page, prepare_query

__all__ = [
    "ProgressHook",
    "clear_all_cards",
    "clear_all_ratings",
    "export_ratings",
    "fetch_all",
    "fetch_page",
    "get_card_stats",
    "get_cards_by_rating",
    "get_commander_card_count",
    "get_random_card",
    "import_ratings",
    "prepare_query",
    "rate_card",
    "reconcile",
    "sync_commander_cards",
]
