"""Scrape orchestration tests."""

import asyncio
import json

import httpx
import pytest

from src.api.schemas import ScrapeResult
from src.scrape import AgentQLClient, ScrapeError, scrape

pytestmark = pytest.mark.asyncio


def _ok(name: str) -> dict:
    return {"data": {"product_details": {"product_name": name}}}


async def test_empty_url_list_makes_no_calls(stub):
    assert await scrape([], stub.client) == []
    assert stub.requests == []


async def test_one_call_per_url_in_input_order(stub):
    urls = [f"https://example.com/{i}" for i in range(5)]
    for i, url in enumerate(urls):
        stub.add(url, _ok(f"p{i}"))

    outcomes = await scrape(urls, stub.client)

    assert stub.requested_urls == urls
    assert [o.url for o in outcomes] == urls
    assert [o.query_details[0].product_name for o in outcomes] == [f"p{i}" for i in range(5)]


async def test_failed_url_does_not_abort_later_urls(stub):
    stub.add("https://example.com/a", _ok("a"))
    stub.add("https://example.com/b", {"message": "blocked"}, status_code=500)
    stub.add("https://example.com/c", _ok("c"))

    outcomes = await scrape(
        ["https://example.com/a", "https://example.com/b", "https://example.com/c"],
        stub.client,
    )

    assert isinstance(outcomes[0], ScrapeResult)
    assert outcomes[1] == ScrapeError(url="https://example.com/b", reason="blocked", status_code=500)
    assert isinstance(outcomes[2], ScrapeResult)
    assert len(stub.requests) == 3


async def test_unexpected_shape_still_yields_result(stub):
    stub.add("https://example.com/a", {"data": {"product_details": None, "Sample_price": "1"}})
    [outcome] = await scrape(["https://example.com/a"], stub.client)
    assert isinstance(outcome, ScrapeResult)
    assert outcome.query_details == []


async def test_duplicate_urls_are_scraped_twice(stub):
    stub.add("https://example.com/a", _ok("a"))
    outcomes = await scrape(["https://example.com/a", "https://example.com/a"], stub.client)
    assert len(outcomes) == 2
    assert len(stub.requests) == 2


async def test_transport_error_propagates(stub):
    stub.add("https://example.com/a", _ok("a"))
    stub.fail("https://example.com/b", httpx.ConnectError("refused"))
    with pytest.raises(httpx.ConnectError):
        await scrape(["https://example.com/a", "https://example.com/b"], stub.client)


async def test_bounded_concurrency_preserves_order():
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        page = json.loads(request.content)["url"]
        # the first URL answers last
        await asyncio.sleep(0.01 if page.endswith("/0") else 0)
        in_flight -= 1
        return httpx.Response(200, json={"data": {"product_details": {"product_name": "x"}}})

    client = AgentQLClient(api_key="k", transport=httpx.MockTransport(handler))
    urls = [f"https://example.com/{i}" for i in range(6)]

    outcomes = await scrape(urls, client, concurrency=2)

    assert [o.url for o in outcomes] == urls
    assert peak <= 2
    await client.aclose()


async def test_fan_out_failure_cancels_calls_in_flight():
    finished: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        page = json.loads(request.content)["url"]
        if page.endswith("/0"):
            raise httpx.ConnectError("refused", request=request)
        await asyncio.sleep(0.05)
        finished.append(page)
        return httpx.Response(200, json={"data": {"product_details": {}}})

    client = AgentQLClient(api_key="k", transport=httpx.MockTransport(handler))
    urls = [f"https://example.com/{i}" for i in range(3)]

    with pytest.raises(httpx.ConnectError):
        await scrape(urls, client, concurrency=3)
    await asyncio.sleep(0.1)

    assert finished == []
    await client.aclose()
