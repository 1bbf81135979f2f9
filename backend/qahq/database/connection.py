"""
Database connection management
SQLAlchemy async engine (aiosqlite by default)
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from qahq.config import settings


def _connect_args(url: str) -> dict:
    # SQLite only
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Async engine (SQL echo off to keep logs readable)
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    connect_args=_connect_args(settings.DATABASE_URL),
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db():
    """
    Create all tables
    Called on application startup
    """
    import qahq.models  # noqa: F401
    from qahq.models.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """
    Dispose the engine
    Called on application shutdown
    """
    await engine.dispose()
