"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: lazily creates the engine for the current event loop
2. Base: declarative base shared by every ORM model
3. create_db_and_tables(): startup schema creation
4. get_async_session(): FastAPI dependency yielding a session per request
"""

import asyncio
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class AsyncEngineManager:
    """
    Manages the SQLAlchemy async engine with event loop awareness.

    asyncpg connections are bound to the loop that opened them, so a new
    engine is created whenever the running loop changes (test runners and
    reloaders start several loops in one process).
    """

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if self._engine is None or (current_loop is not None and self._loop is not current_loop):
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine')
            self._engine = self._create_engine()
            self._session_maker = None
            self._loop = current_loop

        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None

    def _create_engine(self) -> AsyncEngine:
        url = self._database_url or settings.DATABASE_URL_ASYNC
        if url.startswith('postgresql'):
            return create_async_engine(
                url,
                echo=False,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_POOL_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
                pool_pre_ping=settings.DB_POOL_PRE_PING,
            )
        return create_async_engine(url, echo=False)


# Global engine manager
engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return engine_manager.get_session_maker()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create database tables (and their partial unique indexes) if they don't exist"""
    # Register every model on Base.metadata before create_all
    from src.service.library.driven_adapter import model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️  [DB] Tables ready')


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide async session for dependency injection

    The session context manager closes the session on exit and rolls back
    anything left uncommitted.
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        yield session
