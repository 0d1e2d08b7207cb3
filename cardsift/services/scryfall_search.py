"""
Scryfall card search client.

Runs a search query and follows Scryfall's `next_page` cursor until the
result set is exhausted, collecting every card in server order.

API docs: https://scryfall.com/docs/api/cards/search
"""

import asyncio
import logging
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from cardsift.config import settings
from cardsift.models.failure import ApiError, NetworkError
from cardsift.models.scryfall import ScryfallCard, ScryfallSearchPage

logger = logging.getLogger(__name__)


def prepare_query(
    query: str,
    order: str | None = None,
    base_url: str | None = None,
) -> str:
    """
    Build a card search URL restricted to paper products.

    Args:
        query: Scryfall search predicate (e.g. "is:commander legal:commander")
        order: Sort order hint. Defaults to settings.sync_order
        base_url: Search endpoint. Defaults to settings.scryfall_search_url

    Returns:
        Fully-formed search URL
    """
    params = {
        "order": order or settings.sync_order,
        "game": "paper",
        "q": query,
    }
    return f"{base_url or settings.scryfall_search_url}?{urlencode(params)}"


async def fetch_page(url: str, client: httpx.AsyncClient) -> ScryfallSearchPage:
    """
    Fetch and validate a single search results page.

    Raises:
        NetworkError: If Scryfall could not be reached
        ApiError: If Scryfall answered with an error status or an unusable body
    """
    try:
        response = await client.get(url)
    except httpx.RequestError as e:
        raise NetworkError(f"Could not reach Scryfall: {e}") from e

    if response.is_error:
        raise ApiError(
            f"Scryfall returned HTTP {response.status_code}",
            status_code=response.status_code,
            detail=response.text[:500],
        )

    try:
        return ScryfallSearchPage.model_validate_json(response.content)
    except ValidationError as e:
        raise ApiError(
            "Scryfall returned an unexpected response body",
            status_code=response.status_code,
            detail=str(e)[:500],
        ) from e


async def _collect_pages(
    start_url: str, client: httpx.AsyncClient, delay: float
) -> list[ScryfallCard]:
    collected: list[ScryfallCard] = []
    url: str | None = start_url

    while url is not None:
        page = await fetch_page(url, client)
        collected.extend(page.data)

        url = page.next_page if page.has_more and page.next_page else None
        if url is not None:
            logger.info("Collected %d cards so far...", len(collected))
            await asyncio.sleep(delay)

    return collected


async def fetch_all(
    start_url: str,
    client: httpx.AsyncClient | None = None,
    delay: float | None = None,
) -> list[ScryfallCard]:
    """
    Fetch every card matching a search URL.

    Pages are requested one at a time, waiting `delay` seconds between pages
    (never before the first). Cards are returned in the order Scryfall sent
    them. Nothing is retried.

    Args:
        start_url: Search URL from prepare_query
        client: Optional httpx client for connection reuse
        delay: Seconds between page requests. Defaults to settings.request_delay_seconds

    Returns:
        All cards from all pages

    Raises:
        NetworkError: If Scryfall could not be reached
        ApiError: If any page fails or does not match the expected shape
    """
    if delay is None:
        delay = settings.request_delay_seconds

    if client is not None:
        return await _collect_pages(start_url, client, delay)

    async with httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
        timeout=settings.request_timeout_seconds,
    ) as own_client:
        return await _collect_pages(start_url, own_client, delay)
