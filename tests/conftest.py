"""
GameShelf Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite file (aiosqlite driver) under tmp_path,
       so tests never share rows and never need a running database server.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure service tests
    ├── database: connected Database handle on a temp SQLite file
    │   ├── db_session: AsyncSession on that database
    │   ├── seeded_game: the "Donkey Kong" record, committed
    │   └── test_client: HTTPX AsyncClient talking to create_app(database)
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Keep settings away from a production database before any gameshelf import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="gameshelf_test_"), "unused.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from gameshelf.database import Database
from gameshelf.main import create_app
from gameshelf.repositories.game_repository import GameRepository


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_update_unknown(mock_db_session):
            mock_db_session.get.return_value = None
            ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_game_data():
    """The record every endpoint test starts from."""
    return {
        "title": "Donkey Kong",
        "date": "July 1981",
        "genre": "Platformer",
    }


@pytest_asyncio.fixture
async def database(tmp_path):
    """A connected Database on a fresh SQLite file, disconnected afterwards."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'gameshelf.db'}")
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_game(database, sample_game_data):
    """Stores and commits the sample game, returning the detached instance."""
    async with database.session() as session:
        game = await GameRepository(session).create(**sample_game_data)
        await session.commit()
    return game


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the app via ASGITransport.

    ASGITransport does not run lifespan events, so the app is built around
    the already connected `database` fixture.
    """
    app = create_app(database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
