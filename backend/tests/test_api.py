"""API integration tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chat_memory.app import app


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def _create_chat(client: TestClient, user_id: str = "alice", title: str = "Recipes") -> str:
    resp = client.post("/chats", json={"userId": user_id, "title": title})
    assert resp.status_code == 201
    return resp.json()["id"]


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_chat_messages_and_memories(client: TestClient) -> None:
    chat_id = _create_chat(client)
    resp = client.post(
        f"/chats/{chat_id}/messages",
        json={"userId": "alice", "userName": "Alice", "content": "How long do I boil eggs?"},
    )
    assert resp.status_code == 201
    assert resp.json()["authorRole"] == "participant"

    messages = client.get(f"/chats/{chat_id}/messages").json()
    assert [m["content"] for m in messages] == ["How long do I boil eggs?"]

    resp = client.post(f"/chats/{chat_id}/memories", json={"memoryType": "LongTermMemory", "text": "Boil eggs nine minutes"})
    assert resp.status_code == 201
    assert resp.json()["collectionName"] == f"{chat_id}-LongTermMemory"

    resp = client.post(
        f"/chats/{chat_id}/memories/search",
        json={"memoryType": "LongTermMemory", "query": "boil eggs", "limit": 3},
    )
    assert resp.status_code == 200
    assert resp.json()["results"][0]["text"] == "Boil eggs nine minutes"

    chats = client.get("/chats", params={"user_id": "alice"}).json()
    assert [c["id"] for c in chats] == [chat_id]
    assert f"{chat_id}-LongTermMemory" in client.get("/collections").json()


def test_unknown_chat_is_404(client: TestClient) -> None:
    assert client.get("/chats/missing").status_code == 404
    assert client.get("/bot/download/missing").status_code == 404
    resp = client.post("/chats/missing/memories", json={"memoryType": "LongTermMemory", "text": "x"})
    assert resp.status_code == 404


def test_download_and_upload_bot(client: TestClient) -> None:
    chat_id = _create_chat(client)
    client.post(
        f"/chats/{chat_id}/messages",
        json={"userId": "alice", "userName": "Alice", "content": "hello", "timestamp": "2024-05-01T12:00:00Z"},
    )
    client.post(f"/chats/{chat_id}/memories", json={"memoryType": "LongTermMemory", "text": "likes soup"})

    download = client.get(f"/bot/download/{chat_id}")
    assert download.status_code == 200
    bot = download.json()
    assert set(bot) >= {"schema", "embeddingConfigurations", "chatTitle", "chatHistory", "embeddings"}
    assert bot["chatHistory"][0]["chatId"] == chat_id
    assert bot["embeddings"][0]["collectionName"] == f"{chat_id}-LongTermMemory"

    upload = client.post("/bot/upload", params={"user_id": "bob"}, json=bot)
    assert upload.status_code == 202
    body = upload.json()
    assert body["chatId"] != chat_id
    assert body == {"chatId": body["chatId"], "messages": 1, "collections": 1, "records": 1}

    new_chat = client.get(f"/chats/{body['chatId']}").json()
    assert new_chat["title"] == "Recipes - Clone"
    assert new_chat["userId"] == "bob"


def test_upload_rejects_incompatible_and_empty_bots(client: TestClient) -> None:
    chat_id = _create_chat(client)
    client.post(f"/chats/{chat_id}/messages", json={"userId": "alice", "userName": "Alice", "content": "hi"})
    bot = client.get(f"/bot/download/{chat_id}").json()

    incompatible = dict(bot, schema={"name": "CopilotChat", "version": 99})
    resp = client.post("/bot/upload", params={"user_id": "bob"}, json=incompatible)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Incompatible schema"

    empty = dict(bot, chatHistory=[])
    resp = client.post("/bot/upload", params={"user_id": "bob"}, json=empty)
    assert resp.status_code == 400
    assert client.get("/chats", params={"user_id": "bob"}).json() == []


def test_metrics_endpoint(client: TestClient) -> None:
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "chmem_bot_exports_total" in resp.text


def test_uploaded_bot_with_unusable_vectors_stays_searchable(client: TestClient) -> None:
    chat_id = _create_chat(client)
    client.post(f"/chats/{chat_id}/messages", json={"userId": "alice", "userName": "Alice", "content": "hi"})
    client.post(f"/chats/{chat_id}/memories", json={"memoryType": "LongTermMemory", "text": "likes soup"})
    bot = client.get(f"/bot/download/{chat_id}").json()
    bot["embeddings"][0]["records"].append({"id": "e", "text": "empty", "embedding": []})

    upload = client.post("/bot/upload", params={"user_id": "bob"}, json=bot)
    assert upload.status_code == 202
    new_chat_id = upload.json()["chatId"]
    assert upload.json()["records"] == 1

    resp = client.post(
        f"/chats/{new_chat_id}/memories/search",
        json={"memoryType": "LongTermMemory", "query": "soup", "limit": 3},
    )
    assert resp.status_code == 200
    assert [hit["text"] for hit in resp.json()["results"]] == ["likes soup"]

    bot["embeddings"][0]["records"][-1]["embedding"] = [0.5, 0.5]
    resp = client.post("/bot/upload", params={"user_id": "carol"}, json=bot)
    assert resp.status_code == 400
    assert client.get("/chats", params={"user_id": "carol"}).json() == []
