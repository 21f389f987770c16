"""Per-URL scrape orchestration: cache, lightweight fetch, rendered fallback."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import TYPE_CHECKING, Protocol

from .http_fetcher import FetchResult
from .models import ScrapedContent
from .parser import parse_html

if TYPE_CHECKING:
    from linkchat.cache.redis import ContentCache

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Protocol for fetch tiers."""

    async def fetch(self, url: str) -> FetchResult: ...


class ScrapeState(enum.Enum):
    CACHE_CHECK = "cache_check"
    LIGHT_FETCH = "light_fetch"
    DECIDE = "decide"
    RENDER_FETCH = "render_fetch"
    DONE = "done"


def next_state(state: ScrapeState, content: ScrapedContent | None) -> ScrapeState:
    """Transition function of the scrape state machine.

    *content* is the result available after *state* ran: the cached value
    for ``CACHE_CHECK`` (``None`` on miss), the parsed lightweight result for
    ``DECIDE``. It is ignored for the other states.
    """
    if state is ScrapeState.CACHE_CHECK:
        return ScrapeState.DONE if content is not None else ScrapeState.LIGHT_FETCH
    if state is ScrapeState.LIGHT_FETCH:
        return ScrapeState.DECIDE
    if state is ScrapeState.DECIDE:
        if content is not None and content.sections:
            return ScrapeState.DONE
        return ScrapeState.RENDER_FETCH
    if state is ScrapeState.RENDER_FETCH:
        return ScrapeState.DONE
    raise ValueError(f"{state} is terminal")


class Scraper:
    """Turns one URL into a :class:`ScrapedContent`; never raises."""

    def __init__(
        self,
        cache: ContentCache,
        http_fetcher: Fetcher,
        browser_fetcher: Fetcher,
        ceiling: float = 25.0,
    ) -> None:
        self._cache = cache
        self._http_fetcher = http_fetcher
        self._browser_fetcher = browser_fetcher
        self._ceiling = ceiling

    async def scrape(self, url: str) -> ScrapedContent:
        """Scrape *url*, degrading to an empty result on any failure.

        Bounded by the per-URL ceiling. Cancellation is not absorbed: it
        propagates once the tiers have released their resources.
        """
        try:
            return await asyncio.wait_for(self._run(url), timeout=self._ceiling)
        except asyncio.TimeoutError:
            logger.warning("scrape exceeded ceiling", extra={"url": url, "ceiling": self._ceiling})
        except Exception:
            logger.warning("scrape failed", extra={"url": url}, exc_info=True)
        return ScrapedContent.empty(url)

    async def _run(self, url: str) -> ScrapedContent:
        state = ScrapeState.CACHE_CHECK
        fetched: FetchResult | None = None
        content = ScrapedContent.empty(url)

        while state is not ScrapeState.DONE:
            if state is ScrapeState.CACHE_CHECK:
                cached = await self._cache.get(url)
                if cached is not None:
                    logger.debug("scrape tier", extra={"url": url, "tier": "cache"})
                    content = cached
                state = next_state(state, cached)

            elif state is ScrapeState.LIGHT_FETCH:
                fetched = await self._http_fetcher.fetch(url)
                state = next_state(state, None)

            elif state is ScrapeState.DECIDE:
                content = self._parse(url, fetched, tier="http")
                state = next_state(state, content)
                if state is ScrapeState.DONE:
                    await self._cache.put(url, content)

            elif state is ScrapeState.RENDER_FETCH:
                logger.info("falling back to rendered fetch", extra={"url": url})
                rendered = await self._browser_fetcher.fetch(url)
                content = self._parse(url, rendered, tier="browser")
                # Final tier: an empty parse is still the answer for this page.
                if rendered.ok:
                    await self._cache.put(url, content)
                state = next_state(state, content)

        return content

    def _parse(self, url: str, fetched: FetchResult | None, *, tier: str) -> ScrapedContent:
        if fetched is None or not fetched.ok:
            return ScrapedContent.empty(url)
        content = parse_html(url, fetched.html)
        logger.info(
            "page scraped",
            extra={"url": url, "tier": tier, "sections": len(content.sections)},
        )
        return content
