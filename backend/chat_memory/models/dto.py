"""Pydantic DTOs exposed via API and the portable bot format."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chat_memory.models.entities import AuthorRole


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BotSchema(CamelModel):
    name: str
    version: int


class BotEmbeddingConfig(CamelModel):
    ai_service: str = Field(description="Embedding provider identifier")
    deployment_or_model_id: str


class BotChatMessage(CamelModel):
    user_id: str
    user_name: str
    chat_id: str
    content: str
    timestamp: datetime


class BotMemoryRecord(CamelModel):
    id: str
    text: str
    embedding: list[float] | None = None


class BotCollection(CamelModel):
    collection_name: str
    records: list[BotMemoryRecord] = Field(default_factory=list)


class Bot(CamelModel):
    """Portable snapshot of one chat: title, history and memory collections."""

    bot_schema: BotSchema = Field(alias="schema")
    embedding_configurations: BotEmbeddingConfig
    chat_title: str
    source_chat_id: str | None = Field(
        default=None, description="Chat id the snapshot was exported from"
    )
    chat_history: list[BotChatMessage] = Field(default_factory=list)
    embeddings: list[BotCollection] = Field(default_factory=list)


class ImportBotResponse(CamelModel):
    chat_id: str
    messages: int
    collections: int
    records: int


class ChatCreateRequest(CamelModel):
    user_id: str
    title: str


class ChatSessionResponse(CamelModel):
    id: str
    user_id: str
    title: str
    created_at: datetime


class MessageCreateRequest(CamelModel):
    user_id: str
    user_name: str
    content: str
    author_role: AuthorRole = AuthorRole.PARTICIPANT
    timestamp: datetime | None = None


class ChatMessageResponse(CamelModel):
    id: str
    chat_id: str
    user_id: str
    user_name: str
    content: str
    author_role: AuthorRole
    timestamp: datetime


class MemoryCreateRequest(CamelModel):
    memory_type: str = Field(min_length=1)
    text: str = Field(min_length=1)


class MemoryCreateResponse(CamelModel):
    id: str
    collection_name: str


class MemorySearchRequest(CamelModel):
    memory_type: str = Field(min_length=1)
    query: str = Field(min_length=1)
    limit: int | None = Field(default=None, ge=1, le=100)
    min_relevance: float | None = None


class MemoryHit(CamelModel):
    id: str
    text: str
    relevance: float


class MemorySearchResponse(CamelModel):
    collection_name: str
    results: list[MemoryHit]


__all__ = [
    "Bot",
    "BotSchema",
    "BotEmbeddingConfig",
    "BotChatMessage",
    "BotMemoryRecord",
    "BotCollection",
    "ImportBotResponse",
    "ChatCreateRequest",
    "ChatSessionResponse",
    "MessageCreateRequest",
    "ChatMessageResponse",
    "MemoryCreateRequest",
    "MemoryCreateResponse",
    "MemorySearchRequest",
    "MemoryHit",
    "MemorySearchResponse",
]
