"""Read a conversations.json export into raw conversation objects."""

from pathlib import Path
from typing import BinaryIO

from pydantic import TypeAdapter, ValidationError

from chatarchive.importer.models import ExportConversation

_EXPORT_ADAPTER = TypeAdapter(list[ExportConversation])


class MalformedExportError(Exception):
    """Raised when an export cannot be decoded into a list of conversations."""


def read_export(source: str | Path | bytes | BinaryIO) -> list[ExportConversation]:
    """Parse an export from a path, raw bytes, or a binary stream.

    All-or-nothing: either every conversation decodes or MalformedExportError
    is raised. Read failures surface as OSError.
    """
    if isinstance(source, bytes):
        content = source
    elif isinstance(source, (str, Path)):
        content = Path(source).read_bytes()
    else:
        content = source.read()
    return parse_export(content)


def parse_export(content: bytes) -> list[ExportConversation]:
    """Decode export bytes. The top level must be a JSON array."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedExportError(f"Export is not valid UTF-8: {e}") from e
    try:
        return _EXPORT_ADAPTER.validate_json(text)
    except ValidationError as e:
        raise MalformedExportError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    if first["type"] == "json_invalid":
        return f"Invalid JSON: {first.get('ctx', {}).get('error', first['msg'])}"
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"Unexpected export structure at {location}: {first['msg']}"
