"""Database handle and per-request session dependency."""

import logging
from collections.abc import AsyncIterator
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and session factory.

    Constructed explicitly and attached to ``app.state`` by the lifespan
    handler; nothing connects at import time.
    """

    def __init__(self, url: str, echo: bool = False, **engine_options: Any):
        self.url = url
        self.echo = echo
        self.engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(
            self.url, echo=self.echo, pool_pre_ping=True, **self.engine_options
        )
        self._session_maker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(f"Database engine created for {self._engine.url.render_as_string(hide_password=True)}")

    async def close(self) -> None:
        """Dispose the engine and release pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        """Open a new session."""
        if self._session_maker is None:
            raise RuntimeError("Database is not connected")
        return self._session_maker()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the application's database handle.

    Services commit their own work; anything left open when a request fails
    is rolled back here.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
