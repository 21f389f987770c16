"""Web scraping submodule: tiered fetch, HTML sectioning, bounded batches."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .browser_fetcher import BrowserFetcher
from .http_fetcher import FetchResult, HttpFetcher
from .models import ScrapedContent, Section
from .orchestrator import Scraper, ScrapeState, next_state
from .parser import parse_html

if TYPE_CHECKING:
    import httpx

    from linkchat.cache.redis import ContentCache
    from linkchat.config import Settings

__all__ = [
    "BrowserFetcher",
    "FetchResult",
    "HttpFetcher",
    "ScrapeState",
    "ScrapedContent",
    "Scraper",
    "Section",
    "build_default_scraper",
    "next_state",
    "parse_html",
    "scrape_all",
]

logger = logging.getLogger(__name__)


def build_default_scraper(
    settings: Settings,
    cache: ContentCache,
    http_client: httpx.AsyncClient,
) -> Scraper:
    """Build the scraper with its fetch tiers configured from settings."""
    return Scraper(
        cache=cache,
        http_fetcher=HttpFetcher(http_client, timeout=settings.http_fetch_timeout),
        browser_fetcher=BrowserFetcher(
            navigation_timeout=settings.render_timeout,
            ready_timeout=settings.render_ready_timeout,
            disable_sandbox=settings.browser_disable_sandbox,
        ),
        ceiling=settings.scrape_ceiling_seconds,
    )


async def scrape_all(
    urls: list[str],
    scraper: Scraper,
    max_concurrency: int = 4,
) -> list[ScrapedContent]:
    """Scrape *urls* concurrently; one result per input URL, in input order.

    Repeated URLs are scraped once and share a result. At most
    *max_concurrency* scrapes (and so at most that many browsers) run at once.
    """
    if not urls:
        return []

    unique = list(dict.fromkeys(urls))
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def _bounded(url: str) -> ScrapedContent:
        async with semaphore:
            return await scraper.scrape(url)

    logger.debug(
        "scraping urls",
        extra={"url_count": len(urls), "unique_count": len(unique), "max_concurrency": max_concurrency},
    )
    results = await asyncio.gather(*(_bounded(url) for url in unique))
    by_url = dict(zip(unique, results))

    logger.debug(
        "scrape batch complete",
        extra={"urls_attempted": len(unique), "pages_with_content": sum(1 for r in results if r.sections)},
    )
    return [by_url[url] for url in urls]
