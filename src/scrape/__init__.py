"""Scrape submodule: AgentQL client, payload normalizer, per-URL orchestration."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from src.api.schemas import ScrapeResult

from .agentql_client import AgentQLClient, UpstreamError
from .models import ScrapeError, ScrapeOutcome
from .normalizer import normalize

if TYPE_CHECKING:
    from src.config import Settings

__all__ = [
    "AgentQLClient",
    "ScrapeError",
    "ScrapeOutcome",
    "UpstreamError",
    "build_client",
    "scrape",
]

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> AgentQLClient:
    """Build the process-wide AgentQL client from settings."""
    return AgentQLClient(
        api_key=settings.agentql_api_key,
        api_url=settings.agentql_api_url,
        timeout=settings.upstream_timeout_seconds,
    )


async def _scrape_one(url: str, client: AgentQLClient) -> ScrapeOutcome:
    logger.info("scraping url", extra={"url": url})
    try:
        data = await client.query_data(url)
    except UpstreamError as exc:
        logger.warning(
            "failed to scrape url",
            extra={"url": url, "reason": exc.reason, "status_code": exc.status_code},
        )
        return ScrapeError(url=url, reason=exc.reason, status_code=exc.status_code)

    query_details = normalize(data, url)
    logger.info(
        "url scraped",
        extra={"url": url, "product_count": len(query_details)},
    )
    return ScrapeResult(url=url, query_details=query_details)


async def scrape(
    urls: list[str],
    client: AgentQLClient,
    concurrency: int = 1,
) -> list[ScrapeOutcome]:
    """Scrape each URL and return one outcome per URL, in input order.

    With ``concurrency`` of 1 the upstream calls run strictly one after
    another. Anything other than an :class:`UpstreamError` propagates.
    """
    if not urls:
        return []

    logger.debug("scraping urls", extra={"url_count": len(urls), "concurrency": concurrency})

    if concurrency <= 1:
        outcomes: list[ScrapeOutcome] = []
        for url in urls:
            outcomes.append(await _scrape_one(url, client))
    else:
        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(url: str) -> ScrapeOutcome:
            async with semaphore:
                return await _scrape_one(url, client)

        tasks = [asyncio.create_task(bounded(url)) for url in urls]
        try:
            outcomes = list(await asyncio.gather(*tasks))
        except BaseException:
            # one failure fails the request; stop the calls still in flight
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    failed = sum(1 for o in outcomes if isinstance(o, ScrapeError))
    logger.debug(
        "scrape batch complete",
        extra={"urls_attempted": len(urls), "succeeded": len(outcomes) - failed, "failed": failed},
    )
    return outcomes
