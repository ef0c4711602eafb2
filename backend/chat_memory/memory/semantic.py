"""Text-level access to the memory store."""

from __future__ import annotations

from chat_memory.core.logging import get_logger
from chat_memory.memory.embeddings import EmbeddingModel
from chat_memory.memory.store import SQLiteMemoryStore
from chat_memory.models.entities import MemoryQueryResult, MemoryRecord
from chat_memory.utils.ids import new_id

logger = get_logger(__name__)


class SemanticMemory:
    """Embeds text before saving to or searching the memory store."""

    def __init__(self, store: SQLiteMemoryStore, embedding_model: EmbeddingModel) -> None:
        self.store = store
        self.embedding_model = embedding_model

    def save_information(
        self,
        collection: str,
        text: str,
        record_id: str | None = None,
        description: str | None = None,
    ) -> str:
        record = MemoryRecord(
            id=record_id or new_id(),
            text=text,
            embedding=self.embedding_model.embed(text),
            description=description,
        )
        self.store.create_collection(collection)
        logger.debug("Saving memory %s to %s", record.id, collection)
        return self.store.upsert(collection, record)

    def search(
        self,
        collection: str,
        query: str,
        limit: int = 1,
        min_relevance: float = 0.0,
    ) -> list[MemoryQueryResult]:
        return self.store.search(
            collection,
            self.embedding_model.embed(query),
            limit=limit,
            min_relevance=min_relevance,
        )


__all__ = ["SemanticMemory"]
