"""Conversation service: validation and bookkeeping around the record store."""

from datetime import UTC, datetime
from uuid import uuid4

from chatarchive.conversations.schemas import (
    CreateConversationRequest,
    PatchConversationRequest,
)
from chatarchive.conversations.store import ConversationStore
from chatarchive.models import Conversation, ConversationSummary


class InvalidConversationError(Exception):
    """Raised when caller-supplied fields fail required-field checks."""


class ConversationService:
    """Manual CRUD on top of ConversationStore. Imports bypass this layer."""

    def __init__(self, store: ConversationStore) -> None:
        self._store = store

    async def list_conversations(self) -> list[ConversationSummary]:
        return await self._store.list_conversations()

    async def get_conversation(self, conversation_id: str) -> Conversation:
        return await self._store.get(conversation_id)

    async def create_conversation(self, request: CreateConversationRequest) -> Conversation:
        """Create a record by hand. Title and summary are required."""
        title = request.title.strip()
        summary = request.summary.strip()
        if not title or not summary:
            raise InvalidConversationError("title and summary are required")

        conversation = Conversation(
            id=uuid4().hex,
            title=title,
            summary=summary,
            date_started=request.date_started.strip() or None,
            date_ended=request.date_ended.strip() or None,
            source_id=request.source_id.strip() or None,
        )
        return await self._store.upsert(conversation)

    async def update_conversation(
        self, conversation_id: str, request: PatchConversationRequest
    ) -> Conversation:
        """Apply the fields present in request and refresh updated_at."""
        conversation = await self._store.get(conversation_id)
        changes: dict = {}

        if request.title is not None:
            title = request.title.strip()
            if not title:
                raise InvalidConversationError("title cannot be empty")
            changes["title"] = title

        if request.summary is not None:
            summary = request.summary.strip()
            if not summary:
                raise InvalidConversationError("summary cannot be empty")
            changes["summary"] = summary

        if request.date_started is not None:
            changes["date_started"] = request.date_started.strip() or None

        if request.date_ended is not None:
            changes["date_ended"] = request.date_ended.strip() or None

        changes["updated_at"] = datetime.now(UTC)
        return await self._store.upsert(conversation.model_copy(update=changes))

    async def delete_conversation(self, conversation_id: str) -> None:
        await self._store.delete(conversation_id)

    async def delete_all(self) -> None:
        await self._store.delete_all()
