"""Service layer — runs a scrape request for the API routes."""

from __future__ import annotations

import logging

from src.api.errors import SCRAPE_FAILED, ApiError
from src.api.schemas import ScrapeRequest, ScrapeResult
from src.config import Settings
from src.scrape import AgentQLClient, ScrapeError, scrape

logger = logging.getLogger(__name__)


async def run_scrape(
    client: AgentQLClient,
    settings: Settings,
    body: ScrapeRequest,
) -> list[ScrapeResult]:
    """Scrape every requested URL and keep the ones whose upstream call succeeded."""
    logger.info("scrape request received", extra={"url_count": len(body.urls)})
    try:
        outcomes = await scrape(body.urls, client, concurrency=settings.scrape_concurrency)
    except Exception:
        logger.exception("error occurred during scraping", extra={"url_count": len(body.urls)})
        raise ApiError(500, SCRAPE_FAILED)

    results = [o for o in outcomes if not isinstance(o, ScrapeError)]
    skipped = [o.url for o in outcomes if isinstance(o, ScrapeError)]
    if skipped:
        logger.info("urls omitted from response", extra={"urls": skipped})
    return results
