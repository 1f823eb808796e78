"""Shared pytest fixtures for chatarchive tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from chatarchive.conversations.router import get_conversation_service
from chatarchive.conversations.service import ConversationService
from chatarchive.conversations.store import ConversationStore
from chatarchive.db.connection import Database
from chatarchive.importer.router import get_import_service
from chatarchive.importer.service import ImportService
from chatarchive.main import app


@pytest.fixture
async def db():
    """In-memory database for tests."""
    database = await Database.connect(":memory:")
    yield database
    await database.close()


@pytest.fixture
async def store(db):
    """ConversationStore backed by in-memory database."""
    return ConversationStore(db)


@pytest.fixture
async def import_service(store):
    return ImportService(store)


@pytest.fixture
async def client(store, import_service):
    """Async test client with in-memory DB wired into the app."""
    service = ConversationService(store)
    app.dependency_overrides[get_conversation_service] = lambda: service
    app.dependency_overrides[get_import_service] = lambda: import_service
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
