"""Chat engine — extract URLs, scrape, assemble context, complete."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from linkchat.api.schemas import ConversationTurn
from linkchat.chat.completion import CompletionService
from linkchat.chat.context import DEFAULT_MAX_TURNS, build_messages
from linkchat.chat.prompts import SYSTEM_PROMPT
from linkchat.chat.urls import extract_urls
from linkchat.scrape import Scraper, scrape_all

logger = logging.getLogger(__name__)


class ChatProcessingError(Exception):
    """The completion step failed; no reply can be returned."""


class ChatEngine:
    """Runs the per-message pipeline against injected collaborators."""

    def __init__(
        self,
        scraper: Scraper,
        completion: CompletionService,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        max_turns: int = DEFAULT_MAX_TURNS,
        scrape_concurrency: int = 4,
    ) -> None:
        self._scraper = scraper
        self._completion = completion
        self._system_prompt = system_prompt
        self._max_turns = max_turns
        self._scrape_concurrency = scrape_concurrency

    async def respond(self, message: str, context: Sequence[ConversationTurn]) -> str:
        """Answer *message* given the prior *context* turns.

        Scrape failures never surface here (they degrade to empty pages);
        only a completion failure raises, as :class:`ChatProcessingError`.
        """
        started = time.monotonic()
        urls = extract_urls(message)
        if urls:
            logger.info("urls extracted", extra={"url_count": len(urls), "urls": urls[:10]})

        scraped = await scrape_all(urls, self._scraper, max_concurrency=self._scrape_concurrency)
        logger.info(
            "scrape completed",
            extra={
                "urls_attempted": len(urls),
                "pages_with_content": sum(1 for page in scraped if page.sections),
                "elapsed_ms": int((time.monotonic() - started) * 1000),
            },
        )

        messages = build_messages(
            message,
            context,
            scraped,
            system_prompt=self._system_prompt,
            max_turns=self._max_turns,
        )

        try:
            reply = await self._completion.complete(messages)
        except Exception as exc:
            logger.exception("completion failed", extra={"message_count": len(messages)})
            raise ChatProcessingError("completion failed") from exc

        logger.info(
            "chat response generated",
            extra={
                "message_count": len(messages),
                "reply_words": len(reply.split()),
                "elapsed_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return reply
