# marketdb/db/session_async.py
"""Async SQLAlchemy session utilities."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from marketdb.core.config import settings
from marketdb.db.session import install_sqlite_hooks

T = TypeVar("T")


def make_async_engine(url: str, **kwargs) -> AsyncEngine:
    """Build an async engine; SQLite URLs get FK enforcement."""
    engine = create_async_engine(url, pool_pre_ping=True, **kwargs)
    if url.startswith("sqlite"):
        install_sqlite_hooks(engine.sync_engine, transactional_ddl=False)
    return engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


async_engine: AsyncEngine = make_async_engine(settings.ASYNC_DATABASE_URL)

AsyncSessionLocal = make_session_factory(async_engine)


async def run_in_transaction(
    operation: Callable[[AsyncSession], Awaitable[T]],
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> T:
    """Execute an async operation within a managed transaction."""
    factory = session_factory or AsyncSessionLocal
    async with factory() as session:
        try:
            result = await operation(session)
            await session.commit()
            return result
        except Exception:
            await session.rollback()
            raise
