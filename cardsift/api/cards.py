"""
Card API endpoints.

Sync, rating, and random/filtered card retrieval. Every response body carries
a `success` flag; unsuccessful outcomes also set a non-2xx status.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from cardsift.db.database import get_engine, get_session, initialize_database
from cardsift.models.card import (
    VALID_RATING_FILTERS,
    VALID_RATINGS,
    CardResponse,
    CardStats,
    OperationResult,
    SyncResult,
)
from cardsift.models.failure import FailureKind
from cardsift.parsers.scryfall import row_to_card_response
from cardsift.services import card_sync

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cards", tags=["cards"])

_FAILURE_STATUS: dict[FailureKind | None, int] = {
    FailureKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


class CardSummaryResponse(BaseModel):
    """Response model for the card count overview."""

    success: bool = True
    count: int = 0
    stats: CardStats = Field(default_factory=CardStats)


class RateCardRequest(BaseModel):
    """Request model for rating a card."""

    rating: str | None = Field(
        default=None,
        description='"interesting", "not_interesting", or null to clear the rating',
        examples=["interesting"],
    )


class RandomCardResponse(BaseModel):
    success: bool = True
    card: CardResponse


class CardListResponse(BaseModel):
    success: bool = True
    cards: list[CardResponse] = Field(default_factory=list)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=OperationResult(success=False, message=message).model_dump(),
    )


@router.get("", response_model=CardSummaryResponse)
async def get_card_overview(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardSummaryResponse:
    """Number of stored commander cards and their rating breakdown."""
    count = await card_sync.get_commander_card_count(session)
    stats = await card_sync.get_card_stats(session)
    return CardSummaryResponse(count=count, stats=stats)


@router.get("/stats", response_model=CardStats)
async def get_card_stats(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardStats:
    return await card_sync.get_card_stats(session)


@router.post("/init", response_model=OperationResult)
async def init_database(
    engine: Annotated[AsyncEngine, Depends(get_engine)],
) -> OperationResult:
    """Create the cards table if it does not exist yet."""
    return await initialize_database(engine)


@router.post(
    "/sync",
    response_model=SyncResult,
    responses={502: {"model": SyncResult}},
)
async def sync_cards(
    engine: Annotated[AsyncEngine, Depends(get_engine)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SyncResult | JSONResponse:
    """
    Pull every commander-legal paper card from Scryfall into the database.

    Runs to completion before responding. Returns 502 if Scryfall could not
    be read; nothing is stored in that case.
    """
    init_result = await initialize_database(engine)
    if not init_result.success:
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, init_result.message)

    result = await card_sync.sync_commander_cards(session)
    if not result.success:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=result.model_dump())
    return result


@router.post(
    "/{card_id}/rating",
    response_model=OperationResult,
    responses={400: {"model": OperationResult}, 404: {"model": OperationResult}},
)
async def rate_card(
    card_id: str,
    request: RateCardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> OperationResult | JSONResponse:
    """Mark a card as interesting, not interesting, or unrated (null)."""
    if request.rating is not None and request.rating not in VALID_RATINGS:
        return _failure(status.HTTP_400_BAD_REQUEST, "Invalid rating value")

    result = await card_sync.rate_card(session, card_id, request.rating)
    if not result.success:
        code = _FAILURE_STATUS.get(result.failure, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return _failure(code, result.message)
    return result


@router.get(
    "/random",
    response_model=RandomCardResponse,
    responses={400: {"model": OperationResult}, 404: {"model": OperationResult}},
)
async def get_random_card(
    session: Annotated[AsyncSession, Depends(get_session)],
    rating: Annotated[str | None, Query()] = None,
) -> RandomCardResponse | JSONResponse:
    """
    Get a random commander card.

    rating may be "interesting", "not_interesting", or "unrated"; omitted means any card.
    """
    if rating is not None and rating not in VALID_RATING_FILTERS:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            'Invalid rating parameter. Must be "interesting", "not_interesting", or "unrated".',
        )

    card = await card_sync.get_random_card(session, rating)
    if card is None:
        message = (
            f"No commander cards found with rating: {rating}"
            if rating
            else "No commander cards found in database. Please sync cards first."
        )
        return _failure(status.HTTP_404_NOT_FOUND, message)

    return RandomCardResponse(card=row_to_card_response(card))


@router.get(
    "/by-rating",
    response_model=CardListResponse,
    responses={400: {"model": OperationResult}},
)
async def get_cards_by_rating(
    session: Annotated[AsyncSession, Depends(get_session)],
    rating: Annotated[str | None, Query()] = None,
) -> CardListResponse | JSONResponse:
    """All commander cards with the given rating, sorted by name."""
    if rating not in VALID_RATINGS:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            'Invalid rating parameter. Must be "interesting" or "not_interesting".',
        )

    cards = await card_sync.get_cards_by_rating(session, rating)
    return CardListResponse(cards=[row_to_card_response(card) for card in cards])
