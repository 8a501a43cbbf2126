"""Async engine and session factory for the guestbook store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from guestbook.config import DatabaseSettings


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    ``command_timeout`` bounds every statement, so a stuck query surfaces
    as a store error instead of hanging the request.

    Args:
        database: Connection and pool settings
        echo: Log emitted SQL (debug mode)
    """
    return create_async_engine(
        database.url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={"command_timeout": database.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Entities are mapped to domain models right after each query, so
    # nothing relies on lazy refresh after commit.
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
