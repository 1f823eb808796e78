"""Fold a reconstructed timeline into a normalized Conversation record."""

import logging
import re
from datetime import UTC, datetime

from chatarchive.importer.models import ExportContent, ExportConversation, ExportNode
from chatarchive.importer.timeline import build_timeline
from chatarchive.importer.timestamps import to_datetime
from chatarchive.models import Conversation, Message

logger = logging.getLogger(__name__)

SUMMARY_LIMIT = 240
TITLE_LIMIT = 80
ELLIPSIS = "..."
NO_SUMMARY = "No summary available"
UNTITLED = "Untitled conversation"

_TEXT_CONTENT_TYPES = ("text", "multimodal_text")
_KEPT_ROLES = ("user", "assistant")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def extract_text(content: ExportContent) -> str:
    """Join the string parts of a text or multimodal_text payload.

    Each part is trimmed and blank parts are dropped; survivors are separated
    by a blank line. Non-string parts (images, attachments) are skipped, and
    any other content type yields "".
    """
    if content.content_type not in _TEXT_CONTENT_TYPES:
        return ""
    cleaned = [part.strip() for part in content.parts if isinstance(part, str)]
    return "\n\n".join(part for part in cleaned if part)


def truncate(text: str, limit: int) -> str:
    """Shorten text to at most limit characters, ending in an ellipsis when cut."""
    if len(text) <= limit:
        return text
    trimmed = text[: limit - len(ELLIPSIS)].rstrip()
    return trimmed + ELLIPSIS


def slugify(text: str) -> str:
    return _SLUG_SEPARATORS.sub("-", text.lower()).strip("-")


def fallback_id(title: str, created: datetime | None) -> str:
    """Build an id from the title and creation instant, with no hidden state."""
    base = slugify(title) or "conversation"
    if created is None:
        return base
    return f"{base}-{created.astimezone(UTC):%Y%m%d%H%M%S}"


def format_date(ts: datetime | None) -> str | None:
    return ts.astimezone(UTC).strftime("%Y-%m-%d") if ts is not None else None


def normalize_conversation(raw: ExportConversation) -> Conversation | None:
    """Convert one raw export conversation into a record.

    Returns None for conversations with nothing to show: an empty mapping,
    an empty timeline, or a timeline where no node carries text content.
    Conversations whose text is all system or tool output are kept with the
    placeholder summary.
    """
    if not raw.mapping:
        return None
    timeline = build_timeline(raw)
    if not any(_has_text_content(node) for node in timeline):
        logger.debug("Skipping conversation %r: no text content", raw.id)
        return None
    return _fold_timeline(raw, timeline)


def _has_text_content(node: ExportNode) -> bool:
    return (
        node.message is not None
        and node.message.content.content_type in _TEXT_CONTENT_TYPES
    )


def _fold_timeline(raw: ExportConversation, timeline: list[ExportNode]) -> Conversation:
    earliest: datetime | None = None
    latest: datetime | None = None
    first_user = ""
    first_assistant = ""
    messages: list[Message] = []

    for node in timeline:
        message = node.message
        if message is None:
            continue

        ts = to_datetime(message.create_time)
        if ts is not None:
            if earliest is None or ts < earliest:
                earliest = ts
            if latest is None or ts > latest:
                latest = ts

        text = extract_text(message.content)
        if not text:
            continue

        role = message.author.role.lower()
        if role not in _KEPT_ROLES:
            continue
        if role == "user" and not first_user:
            first_user = text
        elif role == "assistant" and not first_assistant:
            first_assistant = text
        messages.append(Message(id=node.id, role=role, content=text, created_at=ts))

    if earliest is None:
        earliest = to_datetime(raw.create_time)
    if latest is None:
        latest = to_datetime(raw.update_time)

    summary = truncate(first_user or first_assistant, SUMMARY_LIMIT) or NO_SUMMARY
    title = (raw.title or "").strip() or truncate(summary, TITLE_LIMIT) or UNTITLED

    conversation_id = (
        (raw.conversation_id or "").strip()
        or (raw.id or "").strip()
        or fallback_id(title, earliest)
    )

    # Timestamps stay None when nothing in the export dates the conversation.
    return Conversation(
        id=conversation_id,
        title=title,
        summary=summary,
        date_started=format_date(earliest),
        date_ended=format_date(latest),
        source_id=conversation_id,
        messages=messages,
        created_at=earliest,
        updated_at=latest or earliest,
    )


def normalize_export(conversations: list[ExportConversation]) -> list[Conversation]:
    """Normalize every conversation, keeping export order and dropping empties."""
    records = []
    for raw in conversations:
        record = normalize_conversation(raw)
        if record is not None:
            records.append(record)
    return records
