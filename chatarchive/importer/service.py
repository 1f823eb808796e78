"""ImportService: turns a conversations.json export into stored records."""

import logging
from pathlib import Path
from typing import BinaryIO

from chatarchive.conversations.store import ConversationStore
from chatarchive.importer.normalize import normalize_export
from chatarchive.importer.reader import read_export
from chatarchive.importer.schemas import ImportResponse, ImportResult
from chatarchive.models import Conversation

logger = logging.getLogger(__name__)


def load_and_convert(source: str | Path | bytes | BinaryIO) -> list[Conversation]:
    """Read an export and return its normalized records in export order.

    Raises MalformedExportError or OSError; nothing is returned on failure.
    """
    raw = read_export(source)
    records = normalize_export(raw)
    logger.info(
        "Converted %d of %d exported conversations", len(records), len(raw)
    )
    return records


class ImportService:
    def __init__(self, store: ConversationStore) -> None:
        self._store = store

    async def import_export(self, source: str | Path | bytes | BinaryIO) -> ImportResponse:
        """Parse an export and upsert every record.

        Parsing is all-or-nothing. Writes are per record: a failing write
        propagates, and records committed before it stay committed.
        """
        records = load_and_convert(source)

        results = []
        for record in records:
            existed = await self._store.exists(record.id)
            await self._store.upsert(record)
            results.append(ImportResult(
                id=record.id,
                title=record.title,
                message_count=len(record.messages),
                status="updated" if existed else "created",
            ))

        created = sum(1 for r in results if r.status == "created")
        logger.info(
            "Imported %d conversations (%d new, %d updated)",
            len(results), created, len(results) - created,
        )
        return ImportResponse(
            imported=len(results),
            created=created,
            updated=len(results) - created,
            results=results,
        )
