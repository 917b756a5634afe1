"""Async SQLAlchemy engines for the write and read pools.

Writes (organization, user and role maintenance) and reads (list pages,
dashboard counts) use separate asyncpg pools. Each pool connects under its
own ``application_name`` so the two show up separately in
``pg_stat_activity``, and read connections carry a statement timeout so a
slow dashboard count gives its connection back instead of holding it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_write_engine",
    "create_read_engine",
    "build_async_url",
    "connect_args_for",
]

PoolRole = Literal["write", "read"]


def create_write_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the engine for mutations.

    The pool is fixed at ``pool_max_connections`` with no overflow.
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_max_connections,
        max_overflow=0,
        pool_pre_ping=True,
        echo=settings.echo_sql,
        connect_args=connect_args_for(settings, "write"),
    )


def create_read_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the engine for list pages and dashboard counts.

    Keeps ``pool_min_connections`` open and grows up to
    ``pool_max_connections`` under load. In production this could point to
    a read replica.
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_min_connections,
        max_overflow=settings.pool_max_connections - settings.pool_min_connections,
        pool_pre_ping=True,
        echo=settings.echo_sql,
        connect_args=connect_args_for(settings, "read"),
    )


def connect_args_for(settings: DatabaseSettings, role: PoolRole) -> dict[str, Any]:
    """Return asyncpg connect arguments for a pool.

    Args:
        settings: Database connection settings
        role: Which pool the connections belong to

    Returns:
        ``server_settings`` applied by PostgreSQL to every new connection
    """
    server_settings = {"application_name": f"{settings.application_name}-{role}"}
    if role == "read" and settings.read_statement_timeout_ms:
        server_settings["statement_timeout"] = str(settings.read_statement_timeout_ms)
    return {"server_settings": server_settings}


def build_async_url(settings: DatabaseSettings) -> str:
    """Build the asyncpg connection URL.

    Username and password are percent-encoded by SQLAlchemy's URL builder,
    so credentials may contain ``@``, ``/`` or ``:``.
    """
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)
