"""Command-line interface for chatarchive.

Usage:
    chatarchive import conversations.json
    chatarchive dump backup.json
    chatarchive restore backup.json
    chatarchive serve --port 8080
"""

import argparse
import asyncio
import logging
import os
import sqlite3
import sys

from chatarchive import config
from chatarchive.conversations.snapshot import (
    SnapshotFormatError,
    read_snapshot,
    write_snapshot,
)
from chatarchive.conversations.store import ConversationStore
from chatarchive.db.connection import Database
from chatarchive.importer.reader import MalformedExportError
from chatarchive.importer.service import ImportService

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure logging with specified level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def run_import(export_path: str, db_path: str) -> str:
    db = await Database.connect(db_path)
    try:
        response = await ImportService(ConversationStore(db)).import_export(export_path)
    finally:
        await db.close()
    return (
        f"Imported {response.imported} conversations "
        f"({response.created} new, {response.updated} updated)"
    )


async def run_dump(out_path: str, db_path: str) -> str:
    db = await Database.connect(db_path)
    try:
        conversations = await ConversationStore(db).list_full_conversations()
    finally:
        await db.close()
    write_snapshot(conversations, out_path)
    return f"Wrote {len(conversations)} conversations to {out_path}"


async def run_restore(snapshot_path: str, db_path: str) -> str:
    conversations = read_snapshot(snapshot_path)
    db = await Database.connect(db_path)
    try:
        store = ConversationStore(db)
        for conversation in conversations:
            await store.upsert(conversation)
    finally:
        await db.close()
    return f"Restored {len(conversations)} conversations from {snapshot_path}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatarchive",
        description="Archive exported chat-assistant conversations.",
    )
    parser.add_argument(
        "--db",
        default=None,
        help=f"SQLite database path (default: $CHATARCHIVE_DB or {config.DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $CHATARCHIVE_LOG_LEVEL or INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Import a conversations.json export")
    import_cmd.add_argument("file", help="Path to the export file")

    dump_cmd = commands.add_parser("dump", help="Write the archive to a JSON snapshot")
    dump_cmd.add_argument("out", help="Snapshot file to write")

    restore_cmd = commands.add_parser("restore", help="Load a JSON snapshot into the archive")
    restore_cmd.add_argument("file", help="Snapshot file to read")

    serve_cmd = commands.add_parser("serve", help="Run the HTTP API")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8080)

    return parser


def main(argv: list[str] | None = None) -> int:
    config.load_env()
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or config.log_level())
    db_path = args.db or config.database_path()

    if args.command == "serve":
        import uvicorn

        os.environ["CHATARCHIVE_DB"] = db_path
        uvicorn.run("chatarchive.main:app", host=args.host, port=args.port)
        return 0

    try:
        if args.command == "import":
            message = asyncio.run(run_import(args.file, db_path))
        elif args.command == "dump":
            message = asyncio.run(run_dump(args.out, db_path))
        else:
            message = asyncio.run(run_restore(args.file, db_path))
    except MalformedExportError as e:
        logger.error("Failed to parse export: %s", e)
        return 1
    except SnapshotFormatError as e:
        logger.error("Failed to read snapshot: %s", e)
        return 1
    except (OSError, sqlite3.Error) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
