from cardsift.db.database import get_engine, get_session, init_db, initialize_database
from cardsift.db.operations import (
    clear_ratings,
    count_cards_by_rating,
    count_commander_cards,
    delete_all_cards,
    get_card,
    get_cards_by_rating,
    get_random_card,
    get_rated_cards,
    insert_card,
    set_card_rating,
    update_card,
    upsert_card,
)

__all__ = [
    "clear_ratings",
    "count_cards_by_rating",
    "count_commander_cards",
    "delete_all_cards",
    "get_card",
    "get_cards_by_rating",
    "get_engine",
    "get_random_card",
    "get_rated_cards",
    "get_session",
    "init_db",
    "initialize_database",
    "insert_card",
    "set_card_rating",
    "update_card",
    "upsert_card",
]
