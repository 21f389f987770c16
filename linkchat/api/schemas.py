"""Request/response Pydantic models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


class ConversationTurn(BaseModel):
    role: Role
    content: str
    timestamp: datetime | None = None


class ChatMessage(BaseModel):
    """A single message handed to the completion service."""

    role: Role
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    context: list[ConversationTurn] = []
    conversation_id: str = Field(alias="conversationId")


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Literal["system"] = "system"
    content: str
    conversation_id: str = Field(alias="conversationId")
