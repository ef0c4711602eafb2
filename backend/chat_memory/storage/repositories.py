"""SQLite-backed chat session and chat message repositories."""

from __future__ import annotations

import sqlite3

from chat_memory.core.errors import NotFoundError
from chat_memory.db.sqlite import SQLiteDatabase, dependency_errors
from chat_memory.models.entities import AuthorRole, ChatMessage, ChatSession
from chat_memory.utils.time import from_ms, to_ms


class ChatSessionRepository:
    def __init__(self, db: SQLiteDatabase) -> None:
        self.db = db

    def create(self, session: ChatSession) -> None:
        with dependency_errors("create chat session"):
            self.db.execute(
                "INSERT INTO chat_sessions (id, user_id, title, source_chat_id, created_at) VALUES (?, ?, ?, ?, ?)",
                [session.id, session.user_id, session.title, session.source_chat_id, to_ms(session.created_at)],
            )
            self.db.commit()

    def find_by_id(self, chat_id: str) -> ChatSession:
        with dependency_errors("find chat session"):
            row = self.db.execute(
                "SELECT id, user_id, title, source_chat_id, created_at FROM chat_sessions WHERE id = ?",
                [chat_id],
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Chat session {chat_id} not found")
        return _row_to_session(row)

    def find_by_user_id(self, user_id: str) -> list[ChatSession]:
        with dependency_errors("list chat sessions"):
            rows = self.db.query(
                "SELECT id, user_id, title, source_chat_id, created_at FROM chat_sessions WHERE user_id = ? ORDER BY rowid",
                [user_id],
            )
        return [_row_to_session(row) for row in rows]


class ChatMessageRepository:
    def __init__(self, db: SQLiteDatabase) -> None:
        self.db = db

    def create(self, message: ChatMessage) -> None:
        """Insert a message, replacing the content of an existing message with the same id."""
        with dependency_errors("create chat message"):
            self.db.execute(
                """
                INSERT INTO chat_messages (id, chat_id, user_id, user_name, content, author_role, timestamp)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                  chat_id = excluded.chat_id,
                  user_id = excluded.user_id,
                  user_name = excluded.user_name,
                  content = excluded.content,
                  author_role = excluded.author_role,
                  timestamp = excluded.timestamp
                """,
                [
                    message.id,
                    message.chat_id,
                    message.user_id,
                    message.user_name,
                    message.content,
                    AuthorRole(message.author_role).value,
                    to_ms(message.timestamp),
                ],
            )
            self.db.commit()

    def find_by_chat_id(self, chat_id: str) -> list[ChatMessage]:
        """Return every message of a chat in insertion order."""
        with dependency_errors("find chat messages"):
            rows = self.db.query(
                """
                SELECT id, chat_id, user_id, user_name, content, author_role, timestamp
                FROM chat_messages WHERE chat_id = ? ORDER BY rowid
                """,
                [chat_id],
            )
        return [_row_to_message(row) for row in rows]


def _row_to_session(row: sqlite3.Row) -> ChatSession:
    return ChatSession(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        source_chat_id=row["source_chat_id"],
        created_at=from_ms(row["created_at"]),
    )


def _row_to_message(row: sqlite3.Row) -> ChatMessage:
    return ChatMessage(
        id=row["id"],
        chat_id=row["chat_id"],
        user_id=row["user_id"],
        user_name=row["user_name"],
        content=row["content"],
        author_role=AuthorRole(row["author_role"]),
        timestamp=from_ms(row["timestamp"]),
    )


__all__ = ["ChatSessionRepository", "ChatMessageRepository"]
