"""Context assembly — system instructions, recent turns, question + scraped pages."""

from __future__ import annotations

from collections.abc import Sequence

from linkchat.api.schemas import ChatMessage, ConversationTurn
from linkchat.scrape.models import ScrapedContent

from .prompts import SYSTEM_PROMPT, format_question_prompt

DEFAULT_MAX_TURNS = 10


def truncate_turns(turns: Sequence[ConversationTurn], max_turns: int) -> list[ConversationTurn]:
    """Keep only the most recent *max_turns* turns, oldest first."""
    if max_turns <= 0:
        return []
    return list(turns[-max_turns:])


def build_messages(
    message: str,
    context: Sequence[ConversationTurn],
    scraped: Sequence[ScrapedContent],
    *,
    system_prompt: str = SYSTEM_PROMPT,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> list[ChatMessage]:
    """Build the message list for the completion service.

    The result is the system message, the retained tail of *context* mapped
    through as ``{role, content}``, and a final user message carrying the
    question and every scraped page (one block per extracted URL). *context*
    is not modified.
    """
    messages = [ChatMessage(role="system", content=system_prompt)]
    messages.extend(
        ChatMessage(role=turn.role, content=turn.content)
        for turn in truncate_turns(context, max_turns)
    )
    messages.append(
        ChatMessage(role="user", content=format_question_prompt(message, list(scraped)))
    )
    return messages
