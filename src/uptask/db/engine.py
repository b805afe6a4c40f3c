"""Database engine, per-request sessions, and schema bootstrap.

Learn: Every GraphQL operation does at most one read and one write, so
a request holds its session only for a couple of round trips. Pool size
and overflow come from UPTASK_DB_POOL_SIZE / UPTASK_DB_MAX_OVERFLOW;
connections are pre-pinged before each checkout.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from uptask.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
)

# expire_on_commit=False: resolvers read rows after the store commits.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency — one session per GraphQL request."""
    async with async_session_factory() as session:
        yield session


async def create_schema() -> None:
    """Create the users/projects/tasks tables and their indexes if missing."""
    from uptask.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
