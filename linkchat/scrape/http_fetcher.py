"""Lightweight fetch tier — plain HTTP GET, no script execution."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)

# Browser-like headers; some sites refuse requests that look like bots.
BROWSER_HEADERS = {
    "User-Agent": USER_AGENT,
    "Referer": "https://www.google.com/",
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.5",
}


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch attempt.

    ``html`` is ``None`` whenever no document was obtained; ``error`` then
    carries a short description.
    """

    url: str
    html: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.html is not None


class HttpFetcher:
    """Fetches pages over a shared :class:`httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 10.0) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, url: str) -> FetchResult:
        """GET *url*. Never raises; failures come back as ``html=None``."""
        try:
            resp = await self._client.get(
                url,
                headers=BROWSER_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException:
            logger.warning("http fetch timed out", extra={"url": url, "timeout": self._timeout})
            return FetchResult(url=url, error="timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("http fetch failed", extra={"url": url}, exc_info=True)
            return FetchResult(url=url, error=f"request error: {exc}")

        if resp.status_code >= 400:
            logger.warning("http fetch error status", extra={"url": url, "status_code": resp.status_code})
            return FetchResult(url=url, status_code=resp.status_code, error=f"HTTP {resp.status_code}")

        logger.debug(
            "http fetch ok",
            extra={"url": url, "status_code": resp.status_code, "length": len(resp.text)},
        )
        return FetchResult(url=url, html=resp.text, status_code=resp.status_code)
