"""Database Session Manager: one AsyncSession per ledger transaction.

Invariants:
    - A session that exits with an exception is rolled back before close
    - SQLAlchemy exceptions leave as DatabaseError, original kept as __cause__
    - Non-SQLite engines ping pooled connections before reuse

Design Decisions:
    - Module-level db_manager set in the FastAPI lifespan; get_db reads it per request
    - expire_on_commit=False: committed WorldState rows stay readable after commit
    - SQLite URLs skip pool sizing arguments (not accepted by its pool class)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from asset_ledger.core.errors import DatabaseError
from asset_ledger.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_SESSION_ERRORS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "World state constraint violated", "commit"),
    (OperationalError, "World state database unreachable", "execute"),
    (DBAPIError, "World state driver error", "query"),
)


def _describe(error: SQLAlchemyError) -> tuple[str, str]:
    for error_type, message, operation in _SESSION_ERRORS:
        if isinstance(error, error_type):
            return message, operation
    return "World state access failed", "session"


class DatabaseSessionManager:
    """Engine plus session factory for the world_state database."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_pre_ping=True,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = _describe(e)
            logger.error(
                f"{message}: {e}",
                extra={"operation": operation, "error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(message, operation) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create missing tables. Local/dev convenience; production uses Alembic."""
        import asset_ledger.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """True when a round trip to the world_state database succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"World state database not ready: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
