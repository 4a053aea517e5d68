"""
chatlink.database

Shared SQLAlchemy declarative base and async session management for ORM model definitions.

Overview:
- Provides a single `declarative_base()` instance (`Base`) inherited by every
    SQLAlchemy ORM entity class in the package.
- Includes a utility class generating async SQLAlchemy sessions for the server
    history store.

Contents:
- Base:
    Singleton `declarative_base` instance. ServerHistoryEntity inherits from it to
    participate in the shared ORM registry and metadata.

- DatabaseSessionGenerator:
    Utility class to generate SQLAlchemy sessions bound to a specific engine.
    - __init__(settings: DatabaseSettings):
        Initializes the async engine from the provided DatabaseSettings.
    - from_engine(engine) -> DatabaseSessionGenerator:
        Wraps an existing async engine (in-memory databases in tests).
    - get_async_session() -> AsyncSession:
        Creates a new asynchronous SQLAlchemy session.
    - init_db():
        Creates all tables defined in the ORM models.
    - dispose():
        Releases the engine's connection pool.

Design Notes:
- Centralizing the declarative base avoids circular import issues and ensures all
    models share the same MetaData instance for schema generation.
- The bootstrap runs on a single event loop, so only the asyncio flavour of the
    engine is exposed; the aiosqlite driver keeps SQLite I/O off the loop.
"""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from chatlink.config import DatabaseSettings


Base = declarative_base()
"""Singleton `declarative_base` instance for ORM models."""


class DatabaseSessionGenerator:
    """
    Utility class to generate SQLAlchemy async sessions bound to a specific engine.

    Attributes:
        engine (sqlalchemy.ext.asyncio.AsyncEngine): The engine sessions are bound to.
    """

    def __init__(self, settings: DatabaseSettings):
        self.engine: AsyncEngine = create_async_engine(settings.database_url)
        self._session_factory = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionGenerator":
        generator = cls.__new__(cls)
        generator.engine = engine
        generator._session_factory = async_sessionmaker(
            bind=engine, class_=AsyncSession, expire_on_commit=False
        )
        return generator

    def get_async_session(self) -> AsyncSession:
        """
        Creates a new SQLAlchemy async session bound to the configured engine.

        Returns:
            sqlalchemy.ext.asyncio.AsyncSession: A new async session instance.
        """
        return self._session_factory()

    async def init_db(self):
        """
        Initializes the database by creating all tables defined in the ORM models.
        """
        if self.engine.url.get_backend_name() == "sqlite" and self.engine.url.database:
            Path(self.engine.url.database).parent.mkdir(parents=True, exist_ok=True)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()
