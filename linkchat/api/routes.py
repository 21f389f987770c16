"""POST /chat, GET /conversations/{id} endpoint handlers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from linkchat.api.schemas import ChatRequest, ChatResponse, ConversationTurn
from linkchat.api.service import get_conversation, handle_chat
from linkchat.cache.conversations import ConversationStore
from linkchat.chat.engine import ChatEngine, ChatProcessingError

router = APIRouter()


def _get_engine(request: Request) -> ChatEngine:
    return request.app.state.engine


def _get_conversations(request: Request) -> ConversationStore:
    return request.app.state.conversations


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    engine: ChatEngine = Depends(_get_engine),
    conversations: ConversationStore = Depends(_get_conversations),
):
    try:
        return await handle_chat(engine, conversations, body)
    except ChatProcessingError:
        raise HTTPException(
            status_code=500,
            detail="An error occurred while processing your message.",
        )


@router.get("/conversations/{conversation_id}", response_model=list[ConversationTurn])
async def read_conversation(
    conversation_id: str,
    conversations: ConversationStore = Depends(_get_conversations),
):
    turns = await get_conversation(conversations, conversation_id)
    if turns is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return turns
