"""Redis-backed scrape content cache and client factory."""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone

import redis.asyncio as redis
from pydantic import ValidationError
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from linkchat.scrape.models import ScrapedContent

logger = logging.getLogger(__name__)

KEY_PREFIX = "scrape:"
DEFAULT_TTL = 7 * 24 * 60 * 60
DEFAULT_MAX_BYTES = 1_000_000
DEFAULT_KEY_MAX_LENGTH = 200


class ContentCache:
    """Best-effort cache of extracted page content, keyed by URL.

    Every failure (Redis unavailable, corrupt entry, oversized value) is
    logged and treated as a miss on read or a no-op on write; nothing here
    raises into the scrape path.
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl: int = DEFAULT_TTL,
        max_bytes: int = DEFAULT_MAX_BYTES,
        key_max_length: int = DEFAULT_KEY_MAX_LENGTH,
    ) -> None:
        self._client = client
        self._ttl = ttl
        self._max_bytes = max_bytes
        self._key_max_length = key_max_length

    def cache_key(self, url: str) -> str:
        """Bounded-length key: the URL prefix, plus a digest for long URLs."""
        if len(url) <= self._key_max_length:
            return f"{KEY_PREFIX}{url}"
        digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
        return f"{KEY_PREFIX}{url[: self._key_max_length]}#{digest}"

    async def get(self, url: str) -> ScrapedContent | None:
        """Return cached content, or ``None`` on miss / error / bad entry."""
        key = self.cache_key(url)
        try:
            try:
                raw = await self._client.get(key)
                if raw is None:
                    logger.debug("cache miss", extra={"url": url})
                    return None
                content = ScrapedContent.model_validate_json(raw)
            except (UnicodeDecodeError, ValidationError):
                logger.warning("evicting invalid cache entry", extra={"url": url, "key": key})
                await self._client.delete(key)
                return None
            logger.debug("cache hit", extra={"url": url, "cached_at": str(content.cached_at)})
            return content
        except redis.RedisError:
            logger.warning("cache get failed", extra={"url": url}, exc_info=True)
            return None

    async def put(self, url: str, content: ScrapedContent) -> bool:
        """Store a timestamped copy of *content*. Returns ``False`` if skipped."""
        stamped = content.model_copy(update={"cached_at": datetime.now(timezone.utc)})
        payload = stamped.model_dump_json()
        size = len(payload.encode("utf-8"))
        if size > self._max_bytes:
            logger.warning(
                "content too large to cache",
                extra={"url": url, "size": size, "max_bytes": self._max_bytes},
            )
            return False
        try:
            await self._client.set(self.cache_key(url), payload, ex=self._ttl)
            logger.debug("cache set", extra={"url": url, "size": size, "ttl": self._ttl})
            return True
        except redis.RedisError:
            logger.warning("cache set failed", extra={"url": url}, exc_info=True)
            return False


async def create_redis_client(redis_url: str, socket_timeout: float = 5.0) -> redis.Redis:
    """Shared async client for the content cache and the conversation store.

    Responses are decoded to ``str``; connection and timeout errors are
    retried with exponential backoff before surfacing as ``RedisError``.
    """
    # Never log credentials: keep only the host part of the URL.
    safe_url = redis_url.rsplit("@", 1)[-1]
    logger.info("connecting to redis", extra={"redis_url": safe_url})
    return redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=socket_timeout,
        socket_timeout=socket_timeout,
        health_check_interval=30,
        retry=Retry(ExponentialBackoff(), retries=3),
        retry_on_error=[redis.ConnectionError, redis.TimeoutError],
    )
