"""Error types raised by chat-memory services."""

from __future__ import annotations


class ChatMemoryError(Exception):
    """Base class for all chat-memory errors."""


class NotFoundError(ChatMemoryError):
    """A referenced chat, message or collection does not exist."""


class IncompatibleSchemaError(ChatMemoryError):
    """An imported bot was produced under a different schema or embedding model."""


class EmptyHistoryError(ChatMemoryError):
    """An imported bot carries no chat messages."""


class InvalidSnapshotError(ChatMemoryError):
    """An imported bot is compatible but its content cannot be stored."""


class DependencyError(ChatMemoryError):
    """A repository or memory store call failed."""


__all__ = [
    "ChatMemoryError",
    "NotFoundError",
    "IncompatibleSchemaError",
    "EmptyHistoryError",
    "InvalidSnapshotError",
    "DependencyError",
]
