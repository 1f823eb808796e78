"""JSON snapshot files: ``{"conversations": [...]}`` with camelCase records.

This is the on-disk format of the original file-backed store, kept so
archives can be dumped for backup and loaded back in.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

from chatarchive.models import Conversation

# Zero-valued timestamps written by the file-backed store mean "unset".
_LEGACY_ZERO_TIME = "0001-01-01T00:00:00Z"


class SnapshotFormatError(Exception):
    """Raised when a snapshot file does not hold a conversations list."""


class Snapshot(BaseModel):
    conversations: list[Conversation]


def write_snapshot(conversations: list[Conversation], path: str | Path) -> None:
    """Write a snapshot atomically: temp file first, then rename over path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = Snapshot(conversations=conversations).model_dump(mode="json", by_alias=True)
    for record in payload["conversations"]:
        if not record["messages"]:
            del record["messages"]

    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
        f.write("\n")
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp_path, path)


def read_snapshot(path: str | Path) -> list[Conversation]:
    """Load a snapshot. A missing file is an empty archive."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise SnapshotFormatError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"Expected a JSON object in {path}")

    conversations = data.get("conversations") or []
    if isinstance(conversations, list):
        for record in conversations:
            if isinstance(record, dict):
                _clear_legacy_blanks(record)

    try:
        return Snapshot.model_validate({"conversations": conversations}).conversations
    except ValidationError as e:
        raise SnapshotFormatError(f"Invalid snapshot {path}: {e}") from e


def _clear_legacy_blanks(record: dict) -> None:
    """Map empty strings and zero times from older files to missing values."""
    for key in ("dateStarted", "dateEnded", "sourceId"):
        if record.get(key) == "":
            record[key] = None
    for key in ("createdAt", "updatedAt"):
        if record.get(key) == _LEGACY_ZERO_TIME:
            record[key] = None
    for message in record.get("messages") or []:
        if isinstance(message, dict) and message.get("createdAt") == _LEGACY_ZERO_TIME:
            message["createdAt"] = None
    if record.get("messages") is None:
        record.pop("messages", None)
