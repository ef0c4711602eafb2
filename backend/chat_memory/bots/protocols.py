"""Capabilities the bot service needs from its collaborators."""

from __future__ import annotations

from typing import Protocol

from chat_memory.models.entities import ChatMessage, ChatSession, MemoryRecord


class ChatRepository(Protocol):
    def create(self, session: ChatSession) -> None: ...

    def find_by_id(self, chat_id: str) -> ChatSession: ...


class MessageRepository(Protocol):
    def create(self, message: ChatMessage) -> None: ...

    def find_by_chat_id(self, chat_id: str) -> list[ChatMessage]: ...


class MemoryStore(Protocol):
    def collection_exists(self, name: str) -> bool: ...

    def create_collection(self, name: str) -> None: ...

    def upsert(self, collection: str, record: MemoryRecord) -> str: ...

    def list_collections(self) -> list[str]: ...

    def list_records(self, collection: str, with_embeddings: bool = True) -> list[MemoryRecord]: ...


__all__ = ["ChatRepository", "MessageRepository", "MemoryStore"]
