"""Async SQLite database engine, session factory, and initialization."""
import logging
import os

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from .config import settings

logger = logging.getLogger(__name__)

engine = None
async_session_factory = None


class Base(DeclarativeBase):
    pass


def configure_engine(database_url: str):
    """(Re)bind the module-level engine and session factory to a database URL."""
    global engine, async_session_factory
    engine = create_async_engine(database_url, echo=False)
    async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return engine


configure_engine(settings.database_url)


async def init_db():
    """Create all tables."""
    db_path = make_url(str(engine.url)).database
    if db_path and db_path != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)

    async with engine.begin() as conn:
        from . import models  # noqa: ensure models are registered
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database initialized at {engine.url}")
