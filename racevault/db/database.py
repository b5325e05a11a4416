"""
Database engines and session management.

Two credentials reach the same store. Requests made on behalf of a user run
on the application engine. The content-cache import, which rewrites catalog
tables, and schema creation run on the admin engine. Without a separate
admin URL both share one engine.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from racevault.config import settings
from racevault.models.db import Base


def _create_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, echo=settings.debug, pool_pre_ping=True)


engine = _create_engine(settings.database_url)
admin_engine = (
    _create_engine(settings.admin_database_url) if settings.admin_database_url else engine
)

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
admin_session_factory = async_sessionmaker(
    admin_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a per-request session on the application engine.

    The request's work is committed as one unit when the handler returns and
    rolled back if a database error escapes it.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def get_admin_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a session on the admin engine.

    The content-cache import commits each write itself, so nothing is
    committed here. Work left uncommitted is discarded when the session
    closes.
    """
    async with admin_session_factory() as session:
        yield session


async def init_db() -> None:
    """Create catalog and ownership tables that do not exist yet."""
    async with admin_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
