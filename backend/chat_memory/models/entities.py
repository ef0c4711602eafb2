"""Internal dataclasses representing persisted entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from chat_memory.utils.ids import new_id
from chat_memory.utils.time import utc_now


class AuthorRole(str, Enum):
    PARTICIPANT = "participant"
    ASSISTANT = "assistant"


@dataclass(slots=True)
class ChatSession:
    user_id: str
    title: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    # Chat this session was imported from, None for chats created directly.
    source_chat_id: str | None = None


@dataclass(slots=True)
class ChatMessage:
    user_id: str
    user_name: str
    chat_id: str
    content: str
    author_role: AuthorRole = AuthorRole.PARTICIPANT
    timestamp: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=new_id)


@dataclass(slots=True)
class MemoryRecord:
    """One entry of a memory collection."""

    id: str
    text: str
    embedding: list[float]
    description: str | None = None


@dataclass(slots=True)
class MemoryQueryResult:
    record: MemoryRecord
    relevance: float
