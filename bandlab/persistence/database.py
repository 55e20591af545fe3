"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bandlab.config import Settings


def connect_args(settings: Settings) -> dict:
    """Driver arguments for new connections.

    PostgreSQL cancels any statement that runs past
    ``database.statement_timeout_ms``. The query fails cleanly and the
    connection stays usable, so a counter update can be retried from a
    savepoint.
    """
    return {
        "server_settings": {
            "statement_timeout": str(settings.database.statement_timeout_ms)
        }
    }


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    The pool must cover the request sessions plus the concurrent
    recent-comment lookups a listing fans out.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args=connect_args(settings),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )

