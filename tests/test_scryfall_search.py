"""Tests for the Scryfall search client (mocked HTTP)."""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import respx
from conftest import SEARCH_URL, make_card_json, make_page

from cardsift.models.failure import ApiError, NetworkError
from cardsift.services.scryfall_search import fetch_all, fetch_page, prepare_query

START_URL = f"{SEARCH_URL}?order=released&game=paper&q=is%3Acommander"
PAGE_2 = f"{SEARCH_URL}?order=released&game=paper&page=2&q=is%3Acommander"
PAGE_3 = f"{SEARCH_URL}?order=released&game=paper&page=3&q=is%3Acommander"


class TestPrepareQuery:
    def test_encodes_query_and_paper_restriction(self) -> None:
        url = prepare_query("is:commander game:paper legal:commander")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == SEARCH_URL
        assert params["q"] == ["is:commander game:paper legal:commander"]
        assert params["game"] == ["paper"]
        assert params["order"] == ["released"]

    def test_order_and_base_url_overrides(self) -> None:
        url = prepare_query("t:legend", order="name", base_url="https://example.test/search")

        assert url.startswith("https://example.test/search?")
        assert parse_qs(urlparse(url).query)["order"] == ["name"]


class TestFetchAll:
    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_three_pages_in_order(self) -> None:
        """Three pages (has_more true, true, false) mean three requests, concatenated."""
        route = respx.get(url__startswith=SEARCH_URL).mock(
            side_effect=[
                httpx.Response(
                    200,
                    json=make_page([make_card_json("a", "A"), make_card_json("b", "B")], PAGE_2),
                ),
                httpx.Response(200, json=make_page([make_card_json("c", "C")], PAGE_3)),
                httpx.Response(
                    200, json=make_page([make_card_json("d", "D"), make_card_json("e", "E")])
                ),
            ]
        )

        cards = await fetch_all(START_URL, delay=0)

        assert route.call_count == 3
        assert [c.id for c in cards] == ["a", "b", "c", "d", "e"]
        requested = [urlparse(str(call.request.url)).query for call in route.calls]
        pages = [parse_qs(query).get("page") for query in requested]
        assert pages == [None, ["2"], ["3"]]

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_page(self) -> None:
        route = respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(200, json=make_page([make_card_json("a", "A")]))
        )

        cards = await fetch_all(START_URL, delay=0)

        assert route.call_count == 1
        assert [c.name for c in cards] == ["A"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_sleeps_only_between_pages(self) -> None:
        """The politeness delay never precedes the first request."""
        respx.get(url__startswith=SEARCH_URL).mock(
            side_effect=[
                httpx.Response(200, json=make_page([make_card_json("a", "A")], PAGE_2)),
                httpx.Response(200, json=make_page([make_card_json("b", "B")], PAGE_3)),
                httpx.Response(200, json=make_page([make_card_json("c", "C")])),
            ]
        )

        with patch(
            "cardsift.services.scryfall_search.asyncio.sleep", new_callable=AsyncMock
        ) as sleep:
            await fetch_all(START_URL, delay=0.05)

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.05)

    @pytest.mark.asyncio
    @respx.mock
    async def test_stops_when_has_more_without_next_page(self) -> None:
        page = make_page([make_card_json("a", "A")])
        page["has_more"] = True
        route = respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(200, json=page)
        )

        cards = await fetch_all(START_URL, delay=0)

        assert route.call_count == 1
        assert len(cards) == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_ignores_next_page_when_has_more_false(self) -> None:
        page = make_page([make_card_json("a", "A")], PAGE_2)
        page["has_more"] = False
        route = respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(200, json=page)
        )

        await fetch_all(START_URL, delay=0)

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_uses_supplied_client(self) -> None:
        route = respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(200, json=make_page([make_card_json("a", "A")]))
        )

        async with httpx.AsyncClient(headers={"User-Agent": "test-agent"}) as client:
            await fetch_all(START_URL, client=client, delay=0)

        assert route.calls.last.request.headers["User-Agent"] == "test-agent"

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises_api_error_without_retry(self) -> None:
        route = respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(503, json={"object": "error", "status": 503})
        )

        with pytest.raises(ApiError) as exc_info:
            await fetch_all(START_URL, delay=0)

        assert exc_info.value.upstream_status == 503
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_on_later_page_aborts(self) -> None:
        respx.get(url__startswith=SEARCH_URL).mock(
            side_effect=[
                httpx.Response(200, json=make_page([make_card_json("a", "A")], PAGE_2)),
                httpx.Response(429, text="Too Many Requests"),
            ]
        )

        with pytest.raises(ApiError, match="HTTP 429"):
            await fetch_all(START_URL, delay=0)

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_failure_raises_network_error(self) -> None:
        respx.get(url__startswith=SEARCH_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(NetworkError):
            await fetch_all(START_URL, delay=0)

    @pytest.mark.asyncio
    @respx.mock
    async def test_redirect_loop_raises_network_error(self) -> None:
        respx.get(url__startswith=SEARCH_URL).mock(side_effect=httpx.TooManyRedirects("loop"))

        with pytest.raises(NetworkError):
            await fetch_all(START_URL, delay=0)


class TestFetchPageValidation:
    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body_raises_api_error(self) -> None:
        respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ApiError, match="unexpected response body"):
                await fetch_page(START_URL, client)

    @pytest.mark.asyncio
    @respx.mock
    async def test_card_without_id_raises_api_error(self) -> None:
        bad_card = make_card_json("a", "A")
        del bad_card["id"]
        respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(200, json=make_page([bad_card]))
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ApiError):
                await fetch_page(START_URL, client)

    @pytest.mark.asyncio
    @respx.mock
    async def test_parses_page_metadata(self) -> None:
        respx.get(url__startswith=SEARCH_URL).mock(
            return_value=httpx.Response(
                200, json=make_page([make_card_json("a", "A")], PAGE_2, total_cards=1750)
            )
        )

        async with httpx.AsyncClient() as client:
            page = await fetch_page(START_URL, client)

        assert page.total_cards == 1750
        assert page.has_more is True
        assert page.next_page == PAGE_2
        assert page.data[0].prices is not None
        assert page.data[0].prices.usd == "79.99"
