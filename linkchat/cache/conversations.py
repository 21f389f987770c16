"""Conversation history store (opaque key/value on Redis)."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from pydantic import TypeAdapter, ValidationError

from linkchat.api.schemas import ConversationTurn

logger = logging.getLogger(__name__)

KEY_PREFIX = "conversation:"

_turns_adapter = TypeAdapter(list[ConversationTurn])


class ConversationStore:
    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    async def get(self, conversation_id: str) -> list[ConversationTurn] | None:
        """Return the stored turns, or ``None`` on miss / error."""
        try:
            raw = await self._client.get(f"{KEY_PREFIX}{conversation_id}")
        except (redis.RedisError, UnicodeDecodeError):
            logger.warning(
                "conversation get failed",
                extra={"conversation_id": conversation_id},
                exc_info=True,
            )
            return None
        if raw is None:
            return None
        try:
            return _turns_adapter.validate_json(raw)
        except ValidationError:
            logger.warning(
                "stored conversation is not a list of turns",
                extra={"conversation_id": conversation_id},
            )
            return None

    async def set(self, conversation_id: str, turns: list[ConversationTurn]) -> bool:
        """Overwrite the stored turns. Returns ``False`` on error."""
        try:
            await self._client.set(
                f"{KEY_PREFIX}{conversation_id}",
                _turns_adapter.dump_json(turns).decode("utf-8"),
            )
            logger.debug(
                "conversation stored",
                extra={"conversation_id": conversation_id, "turns": len(turns)},
            )
            return True
        except redis.RedisError:
            logger.warning(
                "conversation set failed",
                extra={"conversation_id": conversation_id},
                exc_info=True,
            )
            return False
