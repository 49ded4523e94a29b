"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import file_logger, settings
from app.errors.base import BaseAppError
from app.errors.database import DatabaseConnectionError, DatabaseInitializationError

logger = file_logger(getLogger(__name__))


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def engine_kwargs(url: str) -> dict[str, Any]:
    """
    Build engine options for a database URL.

    SQLite has no server-side pool; an in-memory SQLite database must share a
    single connection or every checkout would see an empty database.

    Args:
        url: SQLAlchemy database URL

    Returns:
        dict[str, Any]: Keyword arguments for ``create_async_engine``
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs

    return {
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
    }


class Database:
    """
    Handle on the blog post store.

    Owns the async engine and session factory for one database URL. The
    handle is opened with ``connect`` on application startup and released
    with ``close`` on shutdown.

    Attributes:
        url: SQLAlchemy database URL
        echo: Whether SQL statements are logged
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseConnectionError(detail="Database is not connected")
        return self._engine

    @property
    def session_maker(self) -> async_sessionmaker[SQLModelAsyncSession]:
        if self._session_maker is None:
            raise DatabaseConnectionError(detail="Database is not connected")
        return self._session_maker

    def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(self.url, echo=self.echo, **engine_kwargs(self.url))
        if settings.DEBUG:
            _configure_engine_events(self._engine)

        self._session_maker = async_sessionmaker(
            self._engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
        logger.info(f"Database engine created for {make_url(self.url).render_as_string()}")

    async def create_all(self) -> None:
        """
        Create all tables.

        Raises:
            DatabaseInitializationError: If the schema cannot be created
        """
        # Import all models to ensure they are registered
        from app.models import BlogPostDB  # noqa: F401, PLC0415

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except DatabaseConnectionError:
            raise
        except Exception as e:
            logger.exception("Failed to create database tables")
            raise DatabaseInitializationError from e
        logger.info("Database initialized successfully!")

    async def drop_all(self) -> None:
        """Drop all tables, removing every stored document."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        logger.warning("Database dropped")

    async def ping(self) -> bool:
        """
        Check that the database answers a trivial query.

        Returns:
            bool: True if the database is reachable, False otherwise
        """
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database ping failed")
            return False
        return True

    async def close(self) -> None:
        """
        Close database connections.

        Safe to call on a handle that was never connected.
        """
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """
        Context manager for explicit transaction management.

        Yields:
            AsyncSession: Database session within a transaction

        Example:
            ```python
            async with database.transaction() as session:
                session.add(BlogPostDB(title="...", content="...", author={...}))
                # Commits on successful exit, rolls back on exception
            ```
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except (BaseAppError, HTTPException, RequestValidationError):
                await session.rollback()
                raise
            except SQLAlchemyError as e:
                await session.rollback()
                logger.exception("Transaction error")
                raise DatabaseConnectionError(detail=f"Transaction failed: {e}") from e
            except Exception:
                await session.rollback()
                logger.exception("Transaction error")
                raise
            finally:
                await session.close()


def get_database(request: Request) -> Database:
    """
    Dependency returning the database handle opened by the application lifespan.

    Raises:
        DatabaseConnectionError: If the application has no open database
    """
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseConnectionError(detail="Database is not initialized")
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    This function is used as a FastAPI dependency to provide
    database sessions to route handlers. The session commits when the
    handler returns and rolls back if it raises.

    Yields:
        AsyncSession: Database session
    """
    async with get_database(request).transaction() as session:
        yield session
