"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from chat_memory.bots import BotService
from chat_memory.core.config import Settings, get_settings
from chat_memory.db.sqlite import SQLiteDatabase
from chat_memory.memory.embeddings import EmbeddingModel
from chat_memory.memory.semantic import SemanticMemory
from chat_memory.memory.store import SQLiteMemoryStore
from chat_memory.storage.repositories import ChatMessageRepository, ChatSessionRepository

_DB: SQLiteDatabase | None = None
_BOT_SERVICE: BotService | None = None
_SEMANTIC_MEMORY: SemanticMemory | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_database() -> SQLiteDatabase:
    global _DB
    if _DB is None:
        settings = get_app_settings()
        db = SQLiteDatabase(settings.db_path)
        db.ensure_schema()
        _DB = db
    return _DB


def get_embedding_model() -> EmbeddingModel:
    settings = get_app_settings()
    return EmbeddingModel.get(settings.embedding_model)


def get_chat_repository() -> ChatSessionRepository:
    return ChatSessionRepository(get_database())


def get_message_repository() -> ChatMessageRepository:
    return ChatMessageRepository(get_database())


def get_memory_store() -> SQLiteMemoryStore:
    return SQLiteMemoryStore(get_database())


def get_semantic_memory() -> SemanticMemory:
    global _SEMANTIC_MEMORY
    if _SEMANTIC_MEMORY is None:
        _SEMANTIC_MEMORY = SemanticMemory(get_memory_store(), get_embedding_model())
    return _SEMANTIC_MEMORY


def get_bot_service() -> BotService:
    global _BOT_SERVICE
    if _BOT_SERVICE is None:
        _BOT_SERVICE = BotService(
            chat_repository=get_chat_repository(),
            message_repository=get_message_repository(),
            memory_store=get_memory_store(),
            settings=get_app_settings(),
        )
    return _BOT_SERVICE


__all__ = [
    "get_app_settings",
    "get_database",
    "get_embedding_model",
    "get_chat_repository",
    "get_message_repository",
    "get_memory_store",
    "get_semantic_memory",
    "get_bot_service",
]
