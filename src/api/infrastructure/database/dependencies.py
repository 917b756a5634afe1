"""Database dependency injection for FastAPI.

Provides async session factories for read and write operations with explicit
transaction management and connection pooling.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine, create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

# Created on first use
_write_engine: AsyncEngine | None = None
_read_engine: AsyncEngine | None = None
_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_read_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton).

    Uses double-check locking for thread-safe initialization and caches
    the matching sessionmaker alongside the engine.

    Returns:
        Configured async engine for write operations
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            if _write_engine is None:
                settings = get_database_settings()
                _write_engine = create_write_engine(settings)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created("write", settings.host, settings.database)
    return _write_engine


def get_read_engine() -> AsyncEngine:
    """Get the read database engine (singleton).

    Returns:
        Configured async engine for read operations
    """
    global _read_engine, _read_sessionmaker
    if _read_engine is None:
        with _engine_lock:
            if _read_engine is None:
                settings = get_database_settings()
                _read_engine = create_read_engine(settings)
                _read_sessionmaker = async_sessionmaker(
                    _read_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created("read", settings.host, settings.database)
    return _read_engine


def get_read_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the sessionmaker bound to the read engine.

    For components that open their own short-lived sessions outside of
    FastAPI dependency injection, such as the tenant resolver middleware.
    """
    get_read_engine()
    if _read_sessionmaker is None:
        raise RuntimeError("Read sessionmaker was not initialized")
    return _read_sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations (FastAPI dependency).

    The session does NOT auto-commit. Callers manage transactions with
    ``async with session.begin()``.

    Yields:
        AsyncSession for database operations
    """
    get_write_engine()
    if _write_sessionmaker is None:
        raise RuntimeError("Write sessionmaker was not initialized")

    async with _write_sessionmaker() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a read-only session for queries (FastAPI dependency).

    Read-only is not enforced at the database level; application code
    should use this session only for queries.

    Yields:
        AsyncSession for read-only database operations
    """
    get_read_engine()
    if _read_sessionmaker is None:
        raise RuntimeError("Read sessionmaker was not initialized")

    async with _read_sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose both engines.

    Called on application shutdown. Also resets the sessionmakers so the
    engines can be re-created afterwards (e.g. between tests).
    """
    global _write_engine, _read_engine, _write_sessionmaker, _read_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.pool_closed("write")
        _write_engine = None
        _write_sessionmaker = None

    if _read_engine is not None:
        await _read_engine.dispose()
        _probe.pool_closed("read")
        _read_engine = None
        _read_sessionmaker = None
