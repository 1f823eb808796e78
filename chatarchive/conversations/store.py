"""Conversation record store backed by SQLite.

Every write goes through one asyncio.Lock, so the read-modify-write of the
merge policy never interleaves with another write to the same store. Each
record is committed in its own transaction: the row and its messages land
together or not at all.
"""

import asyncio
import logging
from datetime import UTC, datetime

import aiosqlite

from chatarchive.db.connection import Database
from chatarchive.importer.merge import merge_conversation
from chatarchive.models import Conversation, ConversationSummary, Message

logger = logging.getLogger(__name__)


class ConversationNotFoundError(Exception):
    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__(f"Conversation not found: {conversation_id}")


def _ts_to_db(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def _ts_from_db(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class ConversationStore:
    """Keyed get/upsert/list/delete over conversation records."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._write_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def exists(self, conversation_id: str) -> bool:
        row = await self._db.fetchone(
            "SELECT 1 FROM conversations WHERE id = ?", (conversation_id,)
        )
        return row is not None

    async def get(self, conversation_id: str) -> Conversation:
        """Fetch a full record with messages. Raises ConversationNotFoundError."""
        row = await self._db.fetchone(
            "SELECT * FROM conversations WHERE id = ?", (conversation_id,)
        )
        if row is None:
            raise ConversationNotFoundError(conversation_id)
        message_rows = await self._db.fetchall(
            "SELECT * FROM messages WHERE conversation_id = ? ORDER BY position",
            (conversation_id,),
        )
        return Conversation(
            **self._summary_fields(row),
            messages=[self._message_from_row(m) for m in message_rows],
        )

    async def list_conversations(self) -> list[ConversationSummary]:
        """All records without messages, most recently updated first."""
        rows = await self._db.fetchall(
            "SELECT * FROM conversations ORDER BY updated_at DESC, title ASC"
        )
        return [ConversationSummary(**self._summary_fields(row)) for row in rows]

    async def list_full_conversations(self) -> list[Conversation]:
        """All records with messages, in list_conversations() order."""
        return [await self.get(summary.id) for summary in await self.list_conversations()]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def upsert(self, conversation: Conversation) -> Conversation:
        """Merge conversation into the store and return the persisted value."""
        async with self._write_lock:
            try:
                existing = await self.get(conversation.id)
            except ConversationNotFoundError:
                existing = None
            merged = merge_conversation(conversation, existing)
            async with self._db.transaction() as conn:
                await self._write(conn, merged)
            return merged

    async def delete(self, conversation_id: str) -> None:
        async with self._write_lock:
            async with self._db.transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM conversations WHERE id = ?", (conversation_id,)
                )
                if cursor.rowcount == 0:
                    raise ConversationNotFoundError(conversation_id)
        logger.info("Deleted conversation %s", conversation_id)

    async def delete_all(self) -> None:
        async with self._write_lock:
            async with self._db.transaction() as conn:
                await conn.execute("DELETE FROM messages")
                await conn.execute("DELETE FROM conversations")
        logger.info("Deleted all conversations")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    async def _write(conn: aiosqlite.Connection, conversation: Conversation) -> None:
        await conn.execute(
            """
            INSERT INTO conversations
                (id, title, summary, date_started, date_ended, source_id,
                 created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title = excluded.title,
                summary = excluded.summary,
                date_started = excluded.date_started,
                date_ended = excluded.date_ended,
                source_id = excluded.source_id,
                created_at = excluded.created_at,
                updated_at = excluded.updated_at
            """,
            (
                conversation.id,
                conversation.title,
                conversation.summary,
                conversation.date_started,
                conversation.date_ended,
                conversation.source_id,
                _ts_to_db(conversation.created_at),
                _ts_to_db(conversation.updated_at),
            ),
        )
        await conn.execute(
            "DELETE FROM messages WHERE conversation_id = ?", (conversation.id,)
        )
        await conn.executemany(
            """
            INSERT INTO messages
                (conversation_id, position, message_id, role, content, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    conversation.id,
                    position,
                    message.id,
                    message.role,
                    message.content,
                    _ts_to_db(message.created_at),
                )
                for position, message in enumerate(conversation.messages)
            ],
        )

    @staticmethod
    def _summary_fields(row: aiosqlite.Row) -> dict:
        return {
            "id": row["id"],
            "title": row["title"],
            "summary": row["summary"],
            "date_started": row["date_started"],
            "date_ended": row["date_ended"],
            "source_id": row["source_id"],
            "created_at": _ts_from_db(row["created_at"]),
            "updated_at": _ts_from_db(row["updated_at"]),
        }

    @staticmethod
    def _message_from_row(row: aiosqlite.Row) -> Message:
        return Message(
            id=row["message_id"],
            role=row["role"],
            content=row["content"],
            created_at=_ts_from_db(row["created_at"]),
        )
