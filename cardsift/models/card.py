"""Domain types for card sync, rating, and the service result envelope."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field

from cardsift.models.failure import FailureKind

InterestRating = Literal["interesting", "not_interesting"]
RatingFilter = Literal["interesting", "not_interesting", "unrated"]

VALID_RATINGS: frozenset[str] = frozenset({"interesting", "not_interesting"})
VALID_RATING_FILTERS: frozenset[str] = VALID_RATINGS | {"unrated"}


@dataclass(frozen=True)
class SyncProgress:
    """
    Progress notification passed to a sync progress hook.

    Attributes:
        processed: Records handled so far, including this one
        total: Number of records fetched for this sync
        current_card: Name of the record just handled
    """

    processed: int
    total: int
    current_card: str | None = None


class SyncStats(BaseModel):
    """Counters for one sync invocation. Not persisted."""

    added: int = 0
    updated: int = 0
    total: int = 0
    failed: int = 0


class CardStats(BaseModel):
    """Rating breakdown of the stored commander cards."""

    total: int = 0
    interesting: int = 0
    not_interesting: int = 0
    unrated: int = 0


class OperationResult(BaseModel):
    """
    Outcome of a service operation.

    failure classifies an unsuccessful outcome for callers that map it to a
    status code. It is not serialized.
    """

    success: bool
    message: str
    failure: FailureKind | None = Field(default=None, exclude=True)


class SyncResult(OperationResult):
    stats: SyncStats = Field(default_factory=SyncStats)


class RatingEntry(BaseModel):
    """An exported rating: Scryfall id and the rating assigned to it."""

    id: str
    interest_rating: InterestRating


class RatingsExport(BaseModel):
    success: bool = True
    ratings: list[RatingEntry] = Field(default_factory=list)
    count: int = 0


class ImportResult(OperationResult):
    updated: int = 0
    errors: int = 0


class CardPrices(BaseModel):
    usd: str


class CardResponse(BaseModel):
    """Card payload served to the front end."""

    id: str
    oracle_id: str | None = None
    name: str
    oracle_text: str | None = None
    mana_cost: str | None = None
    type_line: str | None = None
    image_uri_png: str | None = None
    prices: CardPrices | None = None
    set_name: str | None = None
    rarity: str
    power: str | None = None
    toughness: str | None = None
    artist: str | None = None
    card_faces: list[dict[str, Any]] | None = None
    interest_rating: InterestRating | None = None
