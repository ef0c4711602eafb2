"""Tests for the SQLite memory store."""

import pytest

from chat_memory.core.errors import NotFoundError
from chat_memory.models.entities import MemoryRecord


def test_create_collection_is_idempotent(memory_store) -> None:
    assert not memory_store.collection_exists("abc-facts")
    memory_store.create_collection("abc-facts")
    memory_store.create_collection("abc-facts")
    assert memory_store.collection_exists("abc-facts")
    assert memory_store.list_collections() == ["abc-facts"]


def test_upsert_replaces_by_id(memory_store) -> None:
    memory_store.create_collection("abc-facts")
    memory_store.upsert("abc-facts", MemoryRecord(id="r1", text="first", embedding=[1.0, 0.0]))
    memory_store.upsert("abc-facts", MemoryRecord(id="r1", text="second", embedding=[0.0, 1.0]))
    records = memory_store.list_records("abc-facts")
    assert len(records) == 1
    assert records[0].text == "second"
    assert records[0].embedding == [0.0, 1.0]


def test_upsert_requires_collection(memory_store) -> None:
    with pytest.raises(NotFoundError):
        memory_store.upsert("missing", MemoryRecord(id="r1", text="x", embedding=[1.0]))


def test_get_returns_record(memory_store) -> None:
    memory_store.create_collection("c")
    memory_store.upsert("c", MemoryRecord(id="r1", text="hello", embedding=[0.5, 0.5]))
    record = memory_store.get("c", "r1", with_embedding=True)
    assert record is not None
    assert record.embedding == [0.5, 0.5]
    assert memory_store.get("c", "r1").embedding == []
    assert memory_store.get("c", "nope") is None


def test_search_ranks_by_similarity(memory_store) -> None:
    memory_store.create_collection("c")
    memory_store.upsert("c", MemoryRecord(id="a", text="a", embedding=[1.0, 0.0]))
    memory_store.upsert("c", MemoryRecord(id="b", text="b", embedding=[0.0, 1.0]))
    memory_store.upsert("c", MemoryRecord(id="ab", text="ab", embedding=[1.0, 1.0]))

    hits = memory_store.search("c", [1.0, 0.0], limit=2)
    assert [hit.record.id for hit in hits] == ["a", "ab"]
    assert hits[0].relevance == pytest.approx(1.0)
    assert hits[0].record.embedding == []


def test_search_full_dump_mode(memory_store) -> None:
    memory_store.create_collection("c")
    memory_store.upsert("c", MemoryRecord(id="a", text="a", embedding=[1.0, 0.0]))
    memory_store.upsert("c", MemoryRecord(id="neg", text="neg", embedding=[-1.0, 0.0]))

    assert [hit.record.id for hit in memory_store.search("c", [1.0, 0.0], limit=None)] == ["a"]
    hits = memory_store.search("c", [1.0, 0.0], limit=None, min_relevance=None, with_embeddings=True)
    assert [hit.record.id for hit in hits] == ["a", "neg"]
    assert hits[1].record.embedding == [-1.0, 0.0]


def test_search_skips_records_of_another_size(memory_store) -> None:
    memory_store.create_collection("c")
    memory_store.upsert("c", MemoryRecord(id="a", text="a", embedding=[1.0, 0.0]))
    memory_store.upsert("c", MemoryRecord(id="b", text="b", embedding=[1.0, 0.0, 0.0]))
    results = memory_store.search("c", [1.0, 0.0, 0.0], limit=None)
    assert [item.record.id for item in results] == ["b"]


def test_search_unknown_collection_is_empty(memory_store) -> None:
    assert memory_store.search("missing", [1.0]) == []


def test_delete_collection_drops_records(memory_store) -> None:
    memory_store.create_collection("c")
    memory_store.upsert("c", MemoryRecord(id="a", text="a", embedding=[1.0]))
    memory_store.delete_collection("c")
    assert not memory_store.collection_exists("c")
    assert memory_store.list_records("c") == []
