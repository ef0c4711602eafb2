"""Bot compatibility checks."""

from __future__ import annotations

from chat_memory.core.config import Settings
from chat_memory.models.dto import BotEmbeddingConfig, BotSchema


def is_bot_compatible(
    external_schema: BotSchema,
    external_embedding_config: BotEmbeddingConfig,
    embedding_config: BotEmbeddingConfig,
    schema: BotSchema,
) -> bool:
    """Return True when an external bot can be imported into this service.

    Embeddings are only comparable when produced by the same model, so the
    schema name (case-insensitive), schema version, embedding service and
    embedding model id (case-insensitive) must all match.
    """
    return (
        external_schema.name.casefold() == schema.name.casefold()
        and external_schema.version == schema.version
        and external_embedding_config.ai_service == embedding_config.ai_service
        and external_embedding_config.deployment_or_model_id.casefold()
        == embedding_config.deployment_or_model_id.casefold()
    )


def local_schema(settings: Settings) -> BotSchema:
    return BotSchema(name=settings.bot_schema_name, version=settings.bot_schema_version)


def local_embedding_config(settings: Settings) -> BotEmbeddingConfig:
    return BotEmbeddingConfig(
        ai_service=settings.embedding_service,
        deployment_or_model_id=settings.embedding_model,
    )


__all__ = ["is_bot_compatible", "local_schema", "local_embedding_config"]
