"""Async PostgreSQL engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from folio.config import Settings

APPLICATION_NAME = "folio"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    Connections run in UTC so created_at ordering and upload date
    partitions agree with the database clock.

    Args:
        settings: Application settings with database URL and pool sizes

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={
            "server_settings": {
                "application_name": APPLICATION_NAME,
                "timezone": "UTC",
            }
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions are request-scoped; the DI provider commits or rolls back."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
