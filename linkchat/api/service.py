"""Service layer — runs the chat engine and persists the conversation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from linkchat.api.schemas import ChatRequest, ChatResponse, ConversationTurn
from linkchat.cache.conversations import ConversationStore
from linkchat.chat.engine import ChatEngine

logger = logging.getLogger(__name__)


async def handle_chat(
    engine: ChatEngine,
    store: ConversationStore,
    body: ChatRequest,
) -> ChatResponse:
    """Answer one chat request and save the updated conversation.

    Raises :class:`~linkchat.chat.engine.ChatProcessingError` when the
    completion fails; nothing is persisted in that case.
    """
    logger.info(
        "chat request received",
        extra={
            "conversation_id": body.conversation_id,
            "user_message": body.message[:100],
            "context_turns": len(body.context),
        },
    )
    reply = await engine.respond(body.message, body.context)

    turns = [
        *body.context,
        ConversationTurn(role="assistant", content=reply, timestamp=datetime.now(timezone.utc)),
    ]
    # A failed save only loses history; the reply is still returned.
    await store.set(body.conversation_id, turns)

    return ChatResponse(content=reply, conversation_id=body.conversation_id)


async def get_conversation(
    store: ConversationStore,
    conversation_id: str,
) -> list[ConversationTurn] | None:
    """Retrieve the stored turns of a conversation."""
    return await store.get(conversation_id)
