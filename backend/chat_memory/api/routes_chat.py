"""Chat session, message and memory routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from chat_memory.api.dependencies import (
    get_app_settings,
    get_chat_repository,
    get_message_repository,
    get_semantic_memory,
)
from chat_memory.bots.naming import collection_name
from chat_memory.core.config import Settings
from chat_memory.memory.semantic import SemanticMemory
from chat_memory.models.dto import (
    ChatCreateRequest,
    ChatMessageResponse,
    ChatSessionResponse,
    MemoryCreateRequest,
    MemoryCreateResponse,
    MemoryHit,
    MemorySearchRequest,
    MemorySearchResponse,
    MessageCreateRequest,
)
from chat_memory.models.entities import ChatMessage, ChatSession
from chat_memory.storage.repositories import ChatMessageRepository, ChatSessionRepository
from chat_memory.utils.time import utc_now

router = APIRouter()


@router.post("", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED, summary="Create a chat")
async def create_chat(
    request: ChatCreateRequest,
    chats: ChatSessionRepository = Depends(get_chat_repository),
) -> ChatSessionResponse:
    session = ChatSession(user_id=request.user_id, title=request.title)
    chats.create(session)
    return _session_response(session)


@router.get("", response_model=list[ChatSessionResponse], summary="List chats of a user")
async def list_chats(
    user_id: str = Query(..., min_length=1),
    chats: ChatSessionRepository = Depends(get_chat_repository),
) -> list[ChatSessionResponse]:
    return [_session_response(session) for session in chats.find_by_user_id(user_id)]


@router.get("/{chat_id}", response_model=ChatSessionResponse, summary="Get a chat")
async def get_chat(chat_id: str, chats: ChatSessionRepository = Depends(get_chat_repository)) -> ChatSessionResponse:
    return _session_response(chats.find_by_id(chat_id))


@router.get("/{chat_id}/messages", response_model=list[ChatMessageResponse], summary="List chat messages")
async def list_messages(
    chat_id: str,
    chats: ChatSessionRepository = Depends(get_chat_repository),
    messages: ChatMessageRepository = Depends(get_message_repository),
) -> list[ChatMessageResponse]:
    chats.find_by_id(chat_id)
    return [_message_response(message) for message in messages.find_by_chat_id(chat_id)]


@router.post(
    "/{chat_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append a chat message",
)
async def create_message(
    chat_id: str,
    request: MessageCreateRequest,
    chats: ChatSessionRepository = Depends(get_chat_repository),
    messages: ChatMessageRepository = Depends(get_message_repository),
) -> ChatMessageResponse:
    chats.find_by_id(chat_id)
    message = ChatMessage(
        user_id=request.user_id,
        user_name=request.user_name,
        chat_id=chat_id,
        content=request.content,
        author_role=request.author_role,
        timestamp=request.timestamp or utc_now(),
    )
    messages.create(message)
    return _message_response(message)


@router.post(
    "/{chat_id}/memories",
    response_model=MemoryCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a memory for a chat",
)
async def create_memory(
    chat_id: str,
    request: MemoryCreateRequest,
    chats: ChatSessionRepository = Depends(get_chat_repository),
    memory: SemanticMemory = Depends(get_semantic_memory),
) -> MemoryCreateResponse:
    chats.find_by_id(chat_id)
    name = collection_name(chat_id, request.memory_type)
    record_id = memory.save_information(name, request.text)
    return MemoryCreateResponse(id=record_id, collection_name=name)


@router.post("/{chat_id}/memories/search", response_model=MemorySearchResponse, summary="Search chat memories")
async def search_memories(
    chat_id: str,
    request: MemorySearchRequest,
    chats: ChatSessionRepository = Depends(get_chat_repository),
    memory: SemanticMemory = Depends(get_semantic_memory),
    settings: Settings = Depends(get_app_settings),
) -> MemorySearchResponse:
    chats.find_by_id(chat_id)
    name = collection_name(chat_id, request.memory_type)
    hits = memory.search(
        name,
        request.query,
        limit=request.limit or settings.default_search_limit,
        min_relevance=(
            request.min_relevance if request.min_relevance is not None else settings.default_min_relevance
        ),
    )
    return MemorySearchResponse(
        collection_name=name,
        results=[MemoryHit(id=hit.record.id, text=hit.record.text, relevance=hit.relevance) for hit in hits],
    )


def _session_response(session: ChatSession) -> ChatSessionResponse:
    return ChatSessionResponse(
        id=session.id,
        user_id=session.user_id,
        title=session.title,
        created_at=session.created_at,
    )


def _message_response(message: ChatMessage) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=message.id,
        chat_id=message.chat_id,
        user_id=message.user_id,
        user_name=message.user_name,
        content=message.content,
        author_role=message.author_role,
        timestamp=message.timestamp,
    )


__all__ = ["router"]
