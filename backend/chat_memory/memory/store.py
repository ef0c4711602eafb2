"""Collection-scoped vector memory store backed by SQLite."""

from __future__ import annotations

import math
import sqlite3
from array import array
from typing import Sequence

from chat_memory.core.errors import NotFoundError
from chat_memory.core.logging import get_logger
from chat_memory.db.sqlite import SQLiteDatabase, dependency_errors
from chat_memory.models.entities import MemoryQueryResult, MemoryRecord
from chat_memory.utils.time import now_ms

logger = get_logger(__name__)


class SQLiteMemoryStore:
    """Stores memory records per named collection and ranks them by cosine similarity."""

    def __init__(self, db: SQLiteDatabase) -> None:
        self.db = db

    def collection_exists(self, name: str) -> bool:
        with dependency_errors("check collection"):
            row = self.db.execute("SELECT 1 FROM memory_collections WHERE name = ?", [name]).fetchone()
        return row is not None

    def create_collection(self, name: str) -> None:
        """Create a collection; an existing collection is left as is."""
        with dependency_errors("create collection"):
            self.db.execute(
                "INSERT OR IGNORE INTO memory_collections (name, created_at) VALUES (?, ?)",
                [name, now_ms()],
            )
            self.db.commit()

    def delete_collection(self, name: str) -> None:
        with dependency_errors("delete collection"):
            self.db.execute("DELETE FROM memory_collections WHERE name = ?", [name])
            self.db.commit()

    def list_collections(self) -> list[str]:
        with dependency_errors("list collections"):
            rows = self.db.query("SELECT name FROM memory_collections ORDER BY created_at, rowid", [])
        return [row["name"] for row in rows]

    def upsert(self, collection: str, record: MemoryRecord) -> str:
        if not self.collection_exists(collection):
            raise NotFoundError(f"Memory collection {collection} not found")
        now = now_ms()
        with dependency_errors("upsert memory record"):
            self.db.execute(
                """
                INSERT INTO memory_records (collection, id, text, description, dim, vector, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(collection, id) DO UPDATE SET
                  text = excluded.text,
                  description = excluded.description,
                  dim = excluded.dim,
                  vector = excluded.vector,
                  updated_at = excluded.updated_at
                """,
                [
                    collection,
                    record.id,
                    record.text,
                    record.description,
                    len(record.embedding),
                    _as_bytes(record.embedding),
                    now,
                    now,
                ],
            )
            self.db.commit()
        return record.id

    def get(self, collection: str, record_id: str, with_embedding: bool = False) -> MemoryRecord | None:
        with dependency_errors("get memory record"):
            row = self.db.execute(
                "SELECT id, text, description, vector FROM memory_records WHERE collection = ? AND id = ?",
                [collection, record_id],
            ).fetchone()
        if row is None:
            return None
        return _row_to_record(row, with_embedding)

    def list_records(self, collection: str, with_embeddings: bool = True) -> list[MemoryRecord]:
        """Return every record of a collection in insertion order."""
        with dependency_errors("list memory records"):
            rows = self.db.query(
                "SELECT id, text, description, vector FROM memory_records WHERE collection = ? ORDER BY rowid",
                [collection],
            )
        return [_row_to_record(row, with_embeddings) for row in rows]

    def search(
        self,
        collection: str,
        query_embedding: Sequence[float],
        limit: int | None = 1,
        min_relevance: float | None = 0.0,
        with_embeddings: bool = False,
    ) -> list[MemoryQueryResult]:
        """Rank a collection against a query vector.

        ``limit=None`` returns every record and ``min_relevance=None`` disables
        relevance filtering. Records whose vector size differs from the query
        cannot be compared and are left out.
        """
        if not self.collection_exists(collection):
            return []
        scored: list[MemoryQueryResult] = []
        skipped = 0
        for record in self.list_records(collection, with_embeddings=True):
            if len(record.embedding) != len(query_embedding):
                skipped += 1
                continue
            relevance = _cosine(record.embedding, query_embedding)
            if min_relevance is not None and relevance < min_relevance:
                continue
            if not with_embeddings:
                record.embedding = []
            scored.append(MemoryQueryResult(record=record, relevance=relevance))
        if skipped:
            logger.warning(
                "Skipped %s records of %s with a vector size other than %s",
                skipped,
                collection,
                len(query_embedding),
            )
        scored.sort(key=lambda item: item.relevance, reverse=True)
        if limit is not None:
            scored = scored[:limit]
        return scored


def _row_to_record(row: sqlite3.Row, with_embedding: bool) -> MemoryRecord:
    embedding: list[float] = []
    if with_embedding:
        floats = array("f")
        floats.frombytes(row["vector"])
        embedding = list(floats)
    return MemoryRecord(id=row["id"], text=row["text"], embedding=embedding, description=row["description"])


def _as_bytes(vector: Sequence[float]) -> bytes:
    return array("f", vector).tobytes()


def _cosine(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return dot / norm


__all__ = ["SQLiteMemoryStore"]
