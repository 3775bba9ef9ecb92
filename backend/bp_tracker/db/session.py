"""Async engine and sessions for the readings store."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from bp_tracker.config import settings
from bp_tracker.db.base import Base

engine_options: dict = {"echo": settings.debug}
if settings.is_sqlite:
    # aiosqlite connections are bound to the event loop that opened them
    engine_options["poolclass"] = NullPool
else:
    engine_options["pool_pre_ping"] = True

engine = create_async_engine(settings.database_url, **engine_options)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db() -> None:
    """Create the readings table when it does not exist yet (alembic owns later changes)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed when the handler returns, rolled back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
