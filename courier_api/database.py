"""
Database engine, session management, and base model class.

This module sets up SQLAlchemy 2.0 with async support. Key components:

  - build_engine(): Creates the async engine from the configuration record
  - build_sessionmaker(): Factory for creating async database sessions
  - Base: Declarative base class that all ORM models inherit from
  - get_db(): FastAPI dependency that provides a session per request

Nothing here runs at import time. The application factory builds the engine
and session factory once and parks them on `app.state`, and get_db() reads
the factory back from the incoming request.

Session lifecycle:
  Each API request gets its own session via get_db(). The session commits
  on success and rolls back on exception, then the exception continues to
  the framework-level error handlers.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from courier_api.config import Settings


# Used only when DATABASE_URL is not set
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/courier.db"


def resolve_database_url(raw_url: str | None) -> str:
    """
    Turn the raw DATABASE_URL into an async SQLAlchemy URL.

    Plain PostgreSQL URLs (as written for node-postgres or psql) are
    rewritten to use the asyncpg driver. Anything else is passed through.
    """
    if not raw_url:
        return DEFAULT_DATABASE_URL
    for prefix in ("postgresql://", "postgres://"):
        if raw_url.startswith(prefix):
            return "postgresql+asyncpg://" + raw_url[len(prefix):]
    return raw_url


def build_engine(settings: Settings) -> AsyncEngine:
    # echo logs every SQL statement in development
    return create_async_engine(
        resolve_database_url(settings.database_url),
        echo=settings.is_development,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps loaded attributes usable after commit
    # without a lazy reload, which would fail in an async context.
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


async def get_db(request: Request):
    """
    FastAPI dependency that provides a database session.

    Usage in a route:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...

    The session is committed on success and rolled back on any exception,
    then closed when the request completes.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
