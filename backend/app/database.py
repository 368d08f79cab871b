from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

engine = create_async_engine(settings.database_url, echo=settings.database_echo)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request, always closed on exit"""
    async with async_session_maker() as session:
        yield session


@asynccontextmanager
async def scoped_transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a group of writes as a single unit.
    Commits when the block exits normally, rolls back and re-raises otherwise.
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise


async def init_db():
    """Create any missing tables (migrations remain the source of truth)"""
    # Import models so they register on Base.metadata
    from app.models import category, slider, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Database tables ensured")
