from cardsift.models.card import (
    VALID_RATING_FILTERS,
    VALID_RATINGS,
    CardPrices,
    CardResponse,
    CardStats,
    ImportResult,
    InterestRating,
    OperationResult,
    RatingEntry,
    RatingFilter,
    RatingsExport,
    SyncProgress,
    SyncResult,
    SyncStats,
)
from cardsift.models.db import Base, CardDB
from cardsift.models.failure import (
    ApiError,
    CardSiftError,
    FailureKind,
    InputValidationError,
    NetworkError,
    PersistenceError,
)
from cardsift.models.scryfall import (
    ScryfallCard,
    ScryfallCardFace,
    ScryfallImageUris,
    ScryfallPrices,
    ScryfallSearchPage,
)

__all__ = [
    "VALID_RATINGS",
    "VALID_RATING_FILTERS",
    "ApiError",
    "Base",
    "CardDB",
    "CardPrices",
    "CardResponse",
    "CardSiftError",
    "CardStats",
    "FailureKind",
    "ImportResult",
    "InputValidationError",
    "InterestRating",
    "NetworkError",
    "OperationResult",
    "PersistenceError",
    "RatingEntry",
    "RatingFilter",
    "RatingsExport",
    "ScryfallCard",
    "ScryfallCardFace",
    "ScryfallImageUris",
    "ScryfallPrices",
    "ScryfallSearchPage",
    "SyncProgress",
    "SyncResult",
    "SyncStats",
]
