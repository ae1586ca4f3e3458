"""
SQLAlchemy async engine and session management with Read-Write Separation

This module provides:
1. AsyncEngineManager: Manages separate read/write engines with event loop awareness
2. Module-level accessors (get_engine / get_session_maker / dispose_engines)
3. Database class (session factory for dependency injection)

Read-Write Separation:
- Write operations: Always use primary database
- Read operations: Use read replica if configured, otherwise fall back to primary
- Transaction consistency: Within UoW, all operations use write session

Configuration:
- POSTGRES_REPLICA_SERVER / POSTGRES_REPLICA_PORT: Optional read replica
- DATABASE_URL: Full URL override (e.g. sqlite+aiosqlite for local tests)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


def _engine_kwargs(url: str, *, pool_size: int) -> dict[str, Any]:
    if _is_sqlite(url):
        # SQLite serializes writers with a file lock, wait on it instead of failing fast
        return {'connect_args': {'timeout': settings.DB_POOL_TIMEOUT}}
    return {
        'pool_size': pool_size,
        'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
        'pool_timeout': settings.DB_POOL_TIMEOUT,
        'pool_recycle': settings.DB_POOL_RECYCLE,
        'pool_pre_ping': settings.DB_POOL_PRE_PING,
    }


def _is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == 'sqlite'


def _serialize_sqlite_writers(engine: AsyncEngine) -> None:
    """
    Start every SQLite transaction with BEGIN IMMEDIATE

    Concurrent bookings queue on the busy timeout and read committed seats,
    instead of failing with "database is locked" on their first write.
    https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#serializable-isolation-savepoints-transactional-ddl
    """

    @event.listens_for(engine.sync_engine, 'connect')
    def _disable_driver_begin(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, 'begin')
    def _begin_immediate(conn: Any) -> None:
        conn.exec_driver_sql('BEGIN IMMEDIATE')


def _create_engine(url: str, *, pool_size: int) -> AsyncEngine:
    engine = create_async_engine(url, echo=False, **_engine_kwargs(url, pool_size=pool_size))
    if _is_sqlite(url):
        _serialize_sqlite_writers(engine)
    return engine


class AsyncEngineManager:
    """
    Manages SQLAlchemy async engines with event loop awareness.

    Supports read-write separation:
    - Write engine: connects to primary database
    - Read engine: connects to read replica (falls back to primary if not configured)

    Engines are rebuilt when the running event loop changes, which happens
    between pytest-asyncio tests and TestClient instances.
    """

    def __init__(self) -> None:
        self._write_engine: Optional[AsyncEngine] = None
        self._read_engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._write_session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._read_session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self, *, read_only: bool = False) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if current_loop is not None and self._loop is not current_loop:
            if self._write_engine is not None or self._read_engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engines')
                self._reset()
            Logger.base.info(f'🔗 [DB] Creating engines for event loop {id(current_loop)}')
            self._loop = current_loop

        if read_only:
            if self._read_engine is None:
                self._read_engine = self._create_read_engine()
            return self._read_engine
        if self._write_engine is None:
            self._write_engine = self._create_write_engine()
        return self._write_engine

    def get_session_maker(self, *, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine(read_only=read_only)

        if read_only:
            if self._read_session_maker is None:
                self._read_session_maker = async_sessionmaker(
                    engine, class_=AsyncSession, expire_on_commit=False
                )
            return self._read_session_maker

        if self._write_session_maker is None:
            self._write_session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._write_session_maker

    async def dispose(self) -> None:
        """Close pooled connections, called on shutdown and by test teardown"""
        for engine in {self._write_engine, self._read_engine} - {None}:
            await engine.dispose()  # type: ignore[union-attr]
        self._reset()
        self._loop = None

    def _reset(self) -> None:
        self._write_engine = None
        self._read_engine = None
        self._write_session_maker = None
        self._read_session_maker = None

    def _create_write_engine(self) -> AsyncEngine:
        return _create_engine(settings.DATABASE_URL_ASYNC, pool_size=settings.DB_POOL_SIZE_WRITE)

    def _create_read_engine(self) -> AsyncEngine:
        url = settings.DATABASE_READ_URL_ASYNC
        if url == settings.DATABASE_URL_ASYNC:
            # No replica configured, share the primary pool
            return self.get_engine(read_only=False)
        return _create_engine(url, pool_size=settings.DB_POOL_SIZE_READ)


_engine_manager = AsyncEngineManager()


def get_engine(*, read_only: bool = False) -> AsyncEngine:
    """Get event-loop-aware engine (read_only: use replica if available)"""
    return _engine_manager.get_engine(read_only=read_only)


def get_session_maker(*, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
    """Get event-loop-aware session maker (read_only: use replica if available)"""
    return _engine_manager.get_session_maker(read_only=read_only)


async def dispose_engines() -> None:
    await _engine_manager.dispose()


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Table Creation
# =============================================================================


async def create_db_and_tables() -> None:
    """Create tables that don't exist yet (local dev and tests, production uses alembic)"""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Tables ensured')


async def drop_db_and_tables() -> None:
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    Logger.base.warning('🗑️ [DB] Tables dropped')


# =============================================================================
# Session Providers (for FastAPI Depends injection)
# =============================================================================


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Write session, rolled back and closed by the session context manager"""
    session_maker = get_session_maker(read_only=False)
    async with session_maker() as session:
        yield session


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """
    Session factory handed to repositories by the DI container

    Delegates to AsyncEngineManager, so the same Singleton keeps working
    across event loops.
    """

    def __init__(self, *, read_only: bool = False) -> None:
        self._read_only = read_only

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session_maker = get_session_maker(read_only=self._read_only)
        async with session_maker() as session:
            yield session
