"""Test fixtures for chat-memory."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


def _reset_singletons() -> None:
    from chat_memory.api import dependencies as deps
    from chat_memory.core.config import get_settings
    from chat_memory.memory.embeddings import EmbeddingModel

    EmbeddingModel._instances.clear()
    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    if deps._DB is not None:
        deps._DB.close()
    deps._DB = None
    deps._BOT_SERVICE = None
    deps._SEMANTIC_MEMORY = None


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("CHMEM_DB_PATH", str(tmp_path / "chat.db"))
    monkeypatch.delenv("CHMEM_CONFIG", raising=False)
    _reset_singletons()
    yield
    _reset_singletons()


@pytest.fixture
def settings(tmp_path: Path):
    from chat_memory.core.config import Settings

    return Settings(db_path=tmp_path / "unit.db")


@pytest.fixture
def database(settings):
    from chat_memory.db.sqlite import SQLiteDatabase

    db = SQLiteDatabase(settings.db_path)
    db.ensure_schema()
    yield db
    db.close()


@pytest.fixture
def chat_repository(database):
    from chat_memory.storage.repositories import ChatSessionRepository

    return ChatSessionRepository(database)


@pytest.fixture
def message_repository(database):
    from chat_memory.storage.repositories import ChatMessageRepository

    return ChatMessageRepository(database)


@pytest.fixture
def memory_store(database):
    from chat_memory.memory.store import SQLiteMemoryStore

    return SQLiteMemoryStore(database)


@pytest.fixture
def bot_service(chat_repository, message_repository, memory_store, settings):
    from chat_memory.bots import BotService

    return BotService(chat_repository, message_repository, memory_store, settings)
