"""
GameShelf Backend — Database Handle & Session Management
==========================================================

What:  The `Database` handle (async engine + session factory), the declarative
       Base, and the per-request session dependency.
How:   A Database is constructed explicitly and handed to create_app(). The
       application lifespan calls connect() on startup and disconnect() on
       shutdown. Route handlers receive one AsyncSession per request through
       get_db_session(), which reads the handle from app.state.
Who:   main.py (lifecycle), route handlers (Depends), tests (fixtures).

Lifecycle:
    Database(url)        → nothing opened yet, safe to build at import time
    await db.connect()   → engine created, games table created if missing
    db.session()         → new AsyncSession bound to the engine
    await db.disconnect()→ pooled connections closed

Connection Pooling:
    Server databases (PostgreSQL) get pool_size / max_overflow / pre_ping /
    pool_recycle from settings. SQLite URLs are left to the dialect's own
    pool class, which rejects those arguments.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from gameshelf.config import Settings
from gameshelf.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register their tables on Base.metadata, which Database.connect()
    uses to create the schema.
    """
    pass


class Database:
    """
    Explicitly constructed handle to the game store.

    Attributes:
        url:            SQLAlchemy async URL
        engine:         AsyncEngine, None until connect()
        session_factory: async_sessionmaker, None until connect()
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_pre_ping = pool_pre_ping
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self.echo}
        if not self.url.startswith("sqlite"):
            options.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=self.pool_pre_ping,
                pool_recycle=3600,
            )
        return options

    async def connect(self) -> None:
        """
        What:  Creates the engine and session factory, then the schema.
        When:  Application startup (lifespan) or test fixture setup.
        Note:  Calling connect() on an already connected handle is a no-op.
        """
        if self.engine is not None:
            return

        # Import models so their tables are registered on Base.metadata
        from gameshelf.models import game  # noqa: F401

        self.engine = create_async_engine(self.url, **self._engine_options())
        # expire_on_commit=False: attributes stay readable after the
        # request dependency commits and the response is serialized
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Connected to game store (%s)", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> AsyncSession:
        """Returns a new AsyncSession. The caller owns closing it."""
        if self.session_factory is None:
            raise DatabaseError(
                message="Database is not connected",
                context={"url": self.url},
            )
        return self.session_factory()

    async def ping(self) -> bool:
        """Runs SELECT 1; True when the store answers."""
        if self.engine is None:
            return False
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def disconnect(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Application shutdown (lifespan) or test fixture teardown.
        """
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Disconnected from game store")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the Database on app.state
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/game/get")
        async def list_games(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            # Roll back for any failure, including non-DB errors raised after a write
            await session.rollback()
            raise
        finally:
            await session.close()
