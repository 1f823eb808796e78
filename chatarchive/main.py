"""chatarchive FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatarchive import __version__, config
from chatarchive.conversations.router import get_conversation_service
from chatarchive.conversations.router import router as conversations_router
from chatarchive.conversations.service import ConversationService
from chatarchive.conversations.store import ConversationStore
from chatarchive.db.connection import Database
from chatarchive.importer.router import get_import_service
from chatarchive.importer.router import router as import_router
from chatarchive.importer.service import ImportService

config.load_env()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage database lifecycle and service wiring."""
    db = await Database.connect(config.database_path())
    store = ConversationStore(db)

    conversation_service = ConversationService(store)
    app.dependency_overrides[get_conversation_service] = lambda: conversation_service

    import_service = ImportService(store)
    app.dependency_overrides[get_import_service] = lambda: import_service

    app.state.db = db
    yield

    await db.close()


app = FastAPI(
    title="chatarchive",
    description="Local archive of exported chat-assistant conversations",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(conversations_router)
app.include_router(import_router)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}
