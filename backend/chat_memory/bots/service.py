"""Bot export and import."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from chat_memory.bots.compat import is_bot_compatible, local_embedding_config, local_schema
from chat_memory.bots.naming import belongs_to_chat, rekey_collection
from chat_memory.bots.protocols import ChatRepository, MemoryStore, MessageRepository
from chat_memory.core.config import Settings
from chat_memory.core.errors import (
    EmptyHistoryError,
    IncompatibleSchemaError,
    InvalidSnapshotError,
    NotFoundError,
)
from chat_memory.core.logging import bind_logger
from chat_memory.core.metrics import BOT_DURATION, BOT_EXPORTS, BOT_IMPORTS, BOT_RECORDS
from chat_memory.models.dto import Bot, BotChatMessage, BotCollection, BotMemoryRecord
from chat_memory.models.entities import AuthorRole, ChatMessage, ChatSession, MemoryRecord
from chat_memory.utils.ids import stable_id


@dataclass(slots=True)
class ImportSummary:
    chat_id: str
    messages: int
    collections: int
    records: int


@dataclass(slots=True)
class _StagedImport:
    session: ChatSession
    create_session: bool
    messages: list[ChatMessage] = field(default_factory=list)
    collections: dict[str, list[MemoryRecord]] = field(default_factory=dict)

    @property
    def record_count(self) -> int:
        return sum(len(records) for records in self.collections.values())


class BotService:
    """Moves a chat, its history and its memory collections in and out of the service."""

    def __init__(
        self,
        chat_repository: ChatRepository,
        message_repository: MessageRepository,
        memory_store: MemoryStore,
        settings: Settings,
    ) -> None:
        self.chats = chat_repository
        self.messages = message_repository
        self.memory_store = memory_store
        self.settings = settings

    def is_compatible(self, bot: Bot) -> bool:
        return is_bot_compatible(
            external_schema=bot.bot_schema,
            external_embedding_config=bot.embedding_configurations,
            embedding_config=local_embedding_config(self.settings),
            schema=local_schema(self.settings),
        )

    def export_bot(self, chat_id: str) -> Bot:
        """Build a portable snapshot of ``chat_id``; raises NotFoundError for unknown chats."""
        start_time = time.perf_counter()
        log = bind_logger(__name__, operation="export", chat_id=chat_id)
        try:
            chat = self.chats.find_by_id(chat_id)
        except NotFoundError:
            BOT_EXPORTS.labels(status="not_found").inc()
            raise

        # sorted() is stable with reverse=True, so equal timestamps keep insertion order.
        history = sorted(self.messages.find_by_chat_id(chat_id), key=lambda m: m.timestamp, reverse=True)

        embeddings: list[BotCollection] = []
        for name in self.memory_store.list_collections():
            if not belongs_to_chat(name, chat_id):
                continue
            records = self.memory_store.list_records(name, with_embeddings=True)
            embeddings.append(
                BotCollection(
                    collection_name=name,
                    records=[
                        BotMemoryRecord(id=record.id, text=record.text, embedding=record.embedding)
                        for record in records
                    ],
                )
            )

        bot = Bot(
            bot_schema=local_schema(self.settings),
            embedding_configurations=local_embedding_config(self.settings),
            chat_title=chat.title,
            source_chat_id=chat.id,
            chat_history=[
                BotChatMessage(
                    user_id=message.user_id,
                    user_name=message.user_name,
                    chat_id=message.chat_id,
                    content=message.content,
                    timestamp=message.timestamp,
                )
                for message in history
            ],
            embeddings=embeddings,
        )
        record_count = sum(len(collection.records) for collection in embeddings)
        BOT_EXPORTS.labels(status="ok").inc()
        BOT_RECORDS.labels(direction="export").inc(record_count)
        BOT_DURATION.labels(operation="export").observe(time.perf_counter() - start_time)
        log.bind(messages=len(history), collections=len(embeddings), records=record_count).info(
            "Exported bot for chat %s", chat_id
        )
        return bot

    def import_bot(self, user_id: str, bot: Bot, resume_chat_id: str | None = None) -> ImportSummary:
        """Create a new chat for ``user_id`` from ``bot``.

        Nothing is written until the snapshot passed every check and all new
        messages and memory records are built. Writes are upserts keyed on ids
        derived from the new chat id, so a failed import can be finished by
        calling again with ``resume_chat_id`` set to the chat it created.
        """
        start_time = time.perf_counter()
        log = bind_logger(__name__, operation="import", user_id=user_id)
        if not self.is_compatible(bot):
            BOT_IMPORTS.labels(status="incompatible").inc()
            log.warning(
                "Rejected incompatible bot %s v%s (%s/%s)",
                bot.bot_schema.name,
                bot.bot_schema.version,
                bot.embedding_configurations.ai_service,
                bot.embedding_configurations.deployment_or_model_id,
            )
            raise IncompatibleSchemaError("Incompatible schema")
        if not bot.chat_history:
            BOT_IMPORTS.labels(status="empty").inc()
            raise EmptyHistoryError("Bot has no chat history")

        try:
            staged = self._stage_import(user_id, bot, resume_chat_id)
        except InvalidSnapshotError as exc:
            BOT_IMPORTS.labels(status="invalid").inc()
            log.warning("Rejected bot: %s", exc)
            raise
        log = log.bind(chat_id=staged.session.id, source_chat_id=staged.session.source_chat_id)

        if staged.create_session:
            self.chats.create(staged.session)
        else:
            log.info("Resuming import")
        for message in staged.messages:
            self.messages.create(message)
        for name, records in staged.collections.items():
            self.memory_store.create_collection(name)
            for record in records:
                self.memory_store.upsert(name, record)

        summary = ImportSummary(
            chat_id=staged.session.id,
            messages=len(staged.messages),
            collections=len(staged.collections),
            records=staged.record_count,
        )
        BOT_IMPORTS.labels(status="ok").inc()
        BOT_RECORDS.labels(direction="import").inc(summary.records)
        BOT_DURATION.labels(operation="import").observe(time.perf_counter() - start_time)
        log.bind(messages=summary.messages, collections=summary.collections, records=summary.records).info(
            "Imported bot into chat %s", summary.chat_id
        )
        return summary

    def _stage_import(self, user_id: str, bot: Bot, resume_chat_id: str | None) -> _StagedImport:
        old_chat_id = bot.source_chat_id or bot.chat_history[0].chat_id
        if not old_chat_id:
            raise InvalidSnapshotError("Bot does not name the chat it was exported from")
        if resume_chat_id:
            session = self.chats.find_by_id(resume_chat_id)
            # Only a chat created by importing this same source may be resumed.
            if (
                session.user_id != user_id
                or session.source_chat_id is None
                or session.source_chat_id.casefold() != old_chat_id.casefold()
            ):
                raise NotFoundError(f"No import of chat {old_chat_id} found at {resume_chat_id}")
            staged = _StagedImport(session=session, create_session=False)
        else:
            session = ChatSession(
                user_id=user_id,
                title=f"{bot.chat_title}{self.settings.clone_title_suffix}",
                source_chat_id=old_chat_id,
            )
            staged = _StagedImport(session=session, create_session=True)
        new_chat_id = session.id

        for position, message in enumerate(bot.chat_history):
            staged.messages.append(
                ChatMessage(
                    id=stable_id(new_chat_id, "message", position),
                    user_id=message.user_id,
                    user_name=message.user_name,
                    chat_id=new_chat_id,
                    content=message.content,
                    author_role=AuthorRole.PARTICIPANT,
                    timestamp=message.timestamp,
                )
            )

        for collection in bot.embeddings:
            records = [
                MemoryRecord(id=record.id, text=record.text, embedding=list(record.embedding))
                for record in collection.records
                if record.embedding
            ]
            if not records:
                continue
            new_name = rekey_collection(collection.collection_name, old_chat_id, new_chat_id)
            if new_name == collection.collection_name:
                raise InvalidSnapshotError(
                    f"Collection {collection.collection_name} does not name chat {old_chat_id}"
                )
            staged.collections.setdefault(new_name, []).extend(records)

        for name, records in staged.collections.items():
            sizes = sorted({len(record.embedding) for record in records})
            if len(sizes) > 1:
                raise InvalidSnapshotError(f"Collection {name} mixes vector sizes {sizes}")
        return staged


__all__ = ["BotService", "ImportSummary"]
