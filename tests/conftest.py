"""
Notes Service — Test Configuration (conftest.py)
==================================================

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── sample_note: an unsaved Note ORM instance
    ├── database: real storage client on a temporary SQLite file
    └── test_client: HTTPX AsyncClient bound to an app using `database`
"""

import os

# Override settings BEFORE any notes_service import builds the singleton
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STATIC_DIR"] = "./does-not-exist"

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notes_service.config import Settings
from notes_service.database import Database
from notes_service.models.note import Note


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.get_note(mock_db_session, note_id)
    """
    session = AsyncMock()
    # Awaiting execute yields a synchronous Result-like object
    session.execute = AsyncMock(return_value=MagicMock())
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note():
    created = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    return Note(
        id=str(uuid4()),
        title="Groceries",
        content="eggs, milk",
        created_at=created,
        updated_at=created + timedelta(minutes=5),
    )


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """Storage client on a fresh SQLite file with the schema created."""
    db = Database(database_url)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def test_settings(database_url, tmp_path):
    return Settings(
        database_url=database_url,
        static_dir=str(tmp_path / "no-static"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_client(test_settings, database):
    """
    HTTPX AsyncClient talking to an app built around `database`.

    ASGITransport does not run the lifespan; the `database` fixture has
    already created the schema.
    """
    from notes_service.main import create_app

    app = create_app(settings=test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
