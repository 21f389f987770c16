"""Rendered fetch tier — headless Chromium via Playwright.

Only used when the lightweight tier found no structured content. Each call
launches its own browser, which is torn down on every exit path (success,
timeout, error or task cancellation) by the scoped :meth:`BrowserFetcher.open_page`.

Install the browser binary once per host::

    playwright install chromium
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Page, async_playwright

from .http_fetcher import USER_AGENT, FetchResult

logger = logging.getLogger(__name__)

SANDBOX_DISABLE_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class BrowserFetcher:
    """Fetches fully rendered HTML with a short-lived headless browser."""

    def __init__(
        self,
        *,
        navigation_timeout: float = 10.0,
        ready_timeout: float = 5.0,
        disable_sandbox: bool = True,
    ) -> None:
        self._navigation_timeout_ms = navigation_timeout * 1000
        self._ready_timeout_ms = ready_timeout * 1000
        self._launch_args = list(SANDBOX_DISABLE_ARGS) if disable_sandbox else []

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[Page]:
        """Launch an isolated browser and yield one page; always closes both."""
        async with async_playwright() as p:
            browser = await p.chromium.launch(
                headless=True,
                args=self._launch_args,
                timeout=self._navigation_timeout_ms,
            )
            try:
                page = await browser.new_page(user_agent=USER_AGENT)
                try:
                    yield page
                finally:
                    await page.close()
            finally:
                await browser.close()
                logger.debug("browser closed")

    async def fetch(self, url: str) -> FetchResult:
        """Render *url* and return the page source. Never raises on page errors."""
        try:
            async with self.open_page() as page:
                response = await page.goto(
                    url,
                    wait_until="networkidle",
                    timeout=self._navigation_timeout_ms,
                )
                # Client-rendered pages may attach the body late.
                await page.wait_for_selector("body", timeout=self._ready_timeout_ms)
                html = await page.content()
        except Exception:
            logger.warning("rendered fetch failed", extra={"url": url}, exc_info=True)
            return FetchResult(url=url, error="render failed")

        status_code = response.status if response is not None else None
        logger.debug(
            "rendered fetch ok",
            extra={"url": url, "status_code": status_code, "length": len(html)},
        )
        return FetchResult(url=url, html=html, status_code=status_code)
