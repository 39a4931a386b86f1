"""Async engine, session factory and transaction helpers.

Repositories never open transactions themselves; application services wrap
each unit of work in ``async with db.begin()``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings

# lock_not_available, serialization_failure, deadlock_detected
_LOCK_CONFLICT_SQLSTATES = frozenset({"55P03", "40001", "40P01"})


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models across modules."""

    pass


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=20,
    max_overflow=10,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    async with async_session_factory() as session:
        yield session


async def set_lock_timeout(db: AsyncSession, timeout_ms: int) -> None:
    """Bound row-lock waits for the rest of the current transaction."""
    # SET LOCAL does not accept bind parameters
    await db.execute(text(f"SET LOCAL lock_timeout = '{int(timeout_ms)}ms'"))


def is_lock_conflict(exc: BaseException) -> bool:
    """True when a DB error is a lock timeout, serialization failure or deadlock."""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is None and orig is not None:
        # asyncpg errors are wrapped by the SQLAlchemy adapter; the driver error is __cause__
        sqlstate = getattr(orig.__cause__, "sqlstate", None)
    return sqlstate in _LOCK_CONFLICT_SQLSTATES
