# homehelp/core/database.py

import datetime
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from typing import AsyncGenerator

import ulid

from homehelp.core.config import settings


def new_uid() -> str:
    return str(ulid.new())


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)

# 1. async engine
engine = create_async_engine(
    settings.DATABASE_URI,
    echo=settings.DB_ECHO,
    pool_pre_ping=True
)

# 2. session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)

# 3. declarative base shared by every model
class Base(DeclarativeBase):
    pass

# 4. request-scoped session dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding an async database session.
    The service layer is responsible for commit; errors roll back here.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_all_tables() -> None:
    """Create every table known to ``Base.metadata`` (dev/test convenience)."""
    # models must be imported so their tables are registered
    import homehelp.shared.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
