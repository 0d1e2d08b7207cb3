"""
Bulk maintenance endpoints.

Clearing cards or ratings, and moving ratings between databases.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardsift.db.database import get_session
from cardsift.models.card import ImportResult, OperationResult, RatingsExport
from cardsift.services import card_sync

router = APIRouter(prefix="/api", tags=["maintenance"])


class ImportRatingsRequest(BaseModel):
    """Request model for importing ratings."""

    # Entries are checked one by one so a bad entry is counted, not fatal
    ratings: list[Any] = Field(
        ...,
        description="Ratings as produced by /api/export-ratings",
        examples=[
            [{"id": "4e4fb50c-a81f-44d3-93c5-fa9a0b37f617", "interest_rating": "interesting"}]
        ],
    )


def _or_500(result: OperationResult) -> OperationResult | JSONResponse:
    if result.success:
        return result
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=result.model_dump(),
    )


@router.post(
    "/clear-database",
    response_model=OperationResult,
    responses={500: {"model": OperationResult}},
)
async def clear_database(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> OperationResult | JSONResponse:
    """
    Delete every stored card.

    Irreversible. Ratings are lost with the cards.
    """
    return _or_500(await card_sync.clear_all_cards(session))


@router.post(
    "/clear-progress",
    response_model=OperationResult,
    responses={500: {"model": OperationResult}},
)
async def clear_progress(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> OperationResult | JSONResponse:
    """Remove every rating but keep the cards."""
    return _or_500(await card_sync.clear_all_ratings(session))


@router.get("/export-ratings", response_model=RatingsExport)
async def export_ratings(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RatingsExport | JSONResponse:
    result = await card_sync.export_ratings(session)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=OperationResult(success=False, message="Failed to export ratings").model_dump(),
        )
    return result


@router.post("/import-ratings", response_model=ImportResult)
async def import_ratings(
    request: ImportRatingsRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResult:
    """
    Apply exported ratings to cards already in the database.

    Cards are never created. Ratings for unknown cards are counted as errors.
    """
    entries = [entry if isinstance(entry, dict) else {} for entry in request.ratings]
    return await card_sync.import_ratings(session, entries)
