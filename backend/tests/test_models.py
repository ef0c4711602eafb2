"""Tests for the portable bot format."""

from chat_memory.models.dto import Bot

BOT_JSON = {
    "schema": {"name": "CopilotChat", "version": 1},
    "embeddingConfigurations": {"aiService": "Local", "deploymentOrModelId": "hashed-384"},
    "chatTitle": "Recipes",
    "chatHistory": [
        {
            "userId": "alice",
            "userName": "Alice",
            "chatId": "abc",
            "content": "hello",
            "timestamp": "2024-05-01T12:00:00Z",
        }
    ],
    "embeddings": [
        {
            "collectionName": "abc-facts",
            "records": [
                {"id": "r1", "text": "likes soup", "embedding": [0.5, 0.5]},
                {"id": "r2", "text": "no vector", "embedding": None},
            ],
        }
    ],
}


def test_bot_parses_camel_case() -> None:
    bot = Bot.model_validate(BOT_JSON)
    assert bot.bot_schema.name == "CopilotChat"
    assert bot.embedding_configurations.deployment_or_model_id == "hashed-384"
    assert bot.source_chat_id is None
    assert bot.chat_history[0].chat_id == "abc"
    assert bot.embeddings[0].records[1].embedding is None


def test_bot_dumps_wire_field_names() -> None:
    payload = Bot.model_validate(BOT_JSON).model_dump(mode="json", by_alias=True)
    assert payload["schema"] == {"name": "CopilotChat", "version": 1}
    assert payload["chatHistory"][0]["userName"] == "Alice"
    assert payload["embeddings"][0]["collectionName"] == "abc-facts"
    assert "bot_schema" not in payload
