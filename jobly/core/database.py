"""
Database engine and per-request connection handling.

Repositories run hand-built SQL with asyncpg-style ``$n`` placeholders,
so the request dependency hands out a raw ``AsyncConnection`` rather
than an ORM session.
"""
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from jobly.core.config import settings


class Base(DeclarativeBase):
    pass


# Statement logging is set by setup_logging() from DB_ECHO, not echo=
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
)


async def get_db() -> AsyncGenerator[AsyncConnection, None]:
    """
    Dependency to get a database connection.

    The connection runs inside one transaction that commits when the
    request handler returns and rolls back if it raises.
    """
    async with engine.begin() as conn:
        yield conn


async def ping_db() -> None:
    """Round trip to the database; raises if it cannot be reached."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db() -> None:
    """Create tables from model metadata (no migration history)."""
    # Import models so they register with Base.metadata
    from jobly.models import company, job  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Release pooled connections."""
    await engine.dispose()
