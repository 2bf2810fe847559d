"""Engine and session factory for PostgreSQL via asyncpg."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blog.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Pooled engine; SQL is echoed when ``debug`` is on."""
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories flush explicitly and entities are plain pydantic models,
    # so nothing needs refreshing after commit
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
