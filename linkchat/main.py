"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from linkchat.api.routes import router
from linkchat.cache.conversations import ConversationStore
from linkchat.cache.redis import ContentCache, create_redis_client
from linkchat.chat.completion import CompletionService
from linkchat.chat.engine import ChatEngine
from linkchat.config import get_settings
from linkchat.logging_config import setup_logging
from linkchat.scrape import build_default_scraper

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting chat service")

    redis_client = await create_redis_client(settings.redis_url)
    content_cache = ContentCache(
        redis_client,
        ttl=settings.scrape_cache_ttl_seconds,
        max_bytes=settings.scrape_cache_max_bytes,
        key_max_length=settings.cache_key_max_length,
    )
    http_client = httpx.AsyncClient()

    scraper = build_default_scraper(settings, content_cache, http_client)
    completion = CompletionService(settings.llm_provider, settings.chat_llm)
    engine = ChatEngine(
        scraper,
        completion,
        system_prompt=settings.system_prompt,
        max_turns=settings.max_context_turns,
        scrape_concurrency=settings.scrape_concurrency,
    )

    # Attach to app state for dependency injection
    app.state.settings = settings
    app.state.engine = engine
    app.state.conversations = ConversationStore(redis_client)

    logger.info(
        "chat service ready",
        extra={
            "model": completion.model,
            "scrape_concurrency": settings.scrape_concurrency,
            "scrape_ceiling_seconds": settings.scrape_ceiling_seconds,
            "max_context_turns": settings.max_context_turns,
        },
    )

    yield

    logger.info("shutting down chat service")
    await http_client.aclose()
    await redis_client.aclose()


app = FastAPI(title="LinkChat", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
