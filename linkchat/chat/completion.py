"""Completion service — sends an assembled message list to the LLM."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic_ai import Agent
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)

from linkchat.api.schemas import ChatMessage

logger = logging.getLogger(__name__)


def to_model_history(messages: Sequence[ChatMessage]) -> list[ModelMessage]:
    """Map ``{role, content}`` messages onto PydanticAI message history."""
    history: list[ModelMessage] = []
    for msg in messages:
        if msg.role == "system":
            history.append(ModelRequest(parts=[SystemPromptPart(content=msg.content)]))
        elif msg.role == "user":
            history.append(ModelRequest(parts=[UserPromptPart(content=msg.content)]))
        else:
            history.append(ModelResponse(parts=[TextPart(content=msg.content)]))
    return history


class CompletionService:
    """Thin client over a PydanticAI agent for ``provider:model``."""

    def __init__(self, llm_provider: str, model: str) -> None:
        self._model = f"{llm_provider}:{model}"

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        """Return the model's reply text. Provider errors propagate."""
        prompt: str | None = None
        history = list(messages)
        if history and history[-1].role == "user":
            prompt = history.pop().content

        logger.info(
            "requesting completion",
            extra={"model": self._model, "message_count": len(messages)},
        )
        agent = Agent(self._model)
        result = await agent.run(prompt, message_history=to_model_history(history))
        usage = result.usage()
        logger.info(
            "completion received",
            extra={
                "model": self._model,
                "input_tokens": usage.input_tokens or 0,
                "output_tokens": usage.output_tokens or 0,
            },
        )
        return result.output
