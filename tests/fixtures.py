"""Shared test helpers: builders for conversations.json export data."""

import json
from datetime import UTC, datetime
from typing import Any

from chatarchive.importer.models import ExportConversation
from chatarchive.models import Conversation, Message


def export_node(
    node_id: str,
    parent: str | None,
    *,
    role: str = "user",
    content: str | None = "Hello",
    create_time: float | None = 1700000000.0,
    content_type: str = "text",
    parts: list[Any] | None = None,
    children: list[str] | None = None,
) -> dict:
    """Build a single mapping node carrying a message."""
    return {
        "id": node_id,
        "parent": parent,
        "children": children or [],
        "message": {
            "id": f"msg-{node_id}",
            "author": {"role": role},
            "create_time": create_time,
            "update_time": None,
            "content": {
                "content_type": content_type,
                "parts": parts if parts is not None else [content],
            },
            "metadata": {},
        },
    }


def structural_node(node_id: str, parent: str | None, children: list[str] | None = None) -> dict:
    """Build a placeholder node (message=null)."""
    return {"id": node_id, "parent": parent, "children": children or [], "message": None}


def make_export_conversation(
    *,
    conv_id: str | None = "conv-1",
    conversation_id: str | None = None,
    title: str | None = "Test Conversation",
    create_time: float | None = 1700000000.0,
    update_time: float | None = 1700001000.0,
    current_node: str | None = "a2",
    mapping: dict | None = None,
) -> dict:
    """Build a complete export conversation. Default: root -> sys -> u1 -> a1 -> u2 -> a2."""
    if mapping is None:
        mapping = {
            "root": structural_node("root", None, ["sys"]),
            "sys": export_node("sys", "root", role="system",
                               content="You are a helpful assistant.",
                               create_time=None),
            "u1": export_node("u1", "sys", role="user", content="What is Python?",
                              create_time=1700000100.0),
            "a1": export_node("a1", "u1", role="assistant",
                              content="Python is a programming language.",
                              create_time=1700000200.0),
            "u2": export_node("u2", "a1", role="user", content="Tell me more.",
                              create_time=1700000300.0),
            "a2": export_node("a2", "u2", role="assistant",
                              content="It was created by Guido van Rossum.",
                              create_time=1700000400.0),
        }
    conv: dict[str, Any] = {
        "id": conv_id,
        "title": title,
        "create_time": create_time,
        "update_time": update_time,
        "current_node": current_node,
        "mapping": mapping,
    }
    if conversation_id is not None:
        conv["conversation_id"] = conversation_id
    return conv


def parse_conversation(data: dict) -> ExportConversation:
    return ExportConversation.model_validate(data)


def export_bytes(conversations: list[dict]) -> bytes:
    return json.dumps(conversations).encode("utf-8")


def make_record(
    conversation_id: str = "rec-1",
    *,
    title: str = "A record",
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
    messages: list[Message] | None = None,
) -> Conversation:
    return Conversation(
        id=conversation_id,
        title=title,
        summary="Something was discussed",
        date_started="2023-11-14",
        date_ended="2023-11-14",
        source_id=conversation_id,
        messages=messages if messages is not None else [
            Message(id="m1", role="user", content="Hi",
                    created_at=datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)),
        ],
        created_at=created_at,
        updated_at=updated_at,
    )
