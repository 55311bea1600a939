"""Database Session Manager — async engine, sessions with rollback, and the store write lock.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - write_lock is process-wide: every mutating store operation holds it
    - In-memory SQLite has exactly one connection; sessions take turns on it

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - StaticPool for sqlite :memory:, since every new connection would otherwise see an
      empty database
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlalchemy import text

from maintenance_api.core.errors import DatabaseError
from maintenance_api.db.base import Base
import maintenance_api.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


def is_in_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        self.single_connection = is_in_memory_sqlite(database_url)
        if self.single_connection:
            self.engine = create_async_engine(
                database_url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        elif database_url.startswith("sqlite"):
            self.engine = create_async_engine(database_url, echo=echo)
        else:
            self.engine = create_async_engine(
                database_url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.write_lock = asyncio.Lock()
        self._connection_lock = asyncio.Lock() if self.single_connection else None

    @asynccontextmanager
    async def _connection_turn(self) -> AsyncGenerator[None, None]:
        if self._connection_lock is None:
            yield
            return
        async with self._connection_lock:
            yield

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        async with self._connection_turn():
            session = self._session_factory()
            try:
                yield session
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"DB integrity error: {e}")
                raise DatabaseError("Integrity constraint violated", "commit")
            except OperationalError as e:
                await session.rollback()
                logger.error(f"DB operational error: {e}")
                raise DatabaseError("Connection or operational error", "execute")
            except DBAPIError as e:
                await session.rollback()
                logger.error(f"DB driver error: {e}")
                raise DatabaseError("Database driver error", "query")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"SQLAlchemy error: {e}")
                raise DatabaseError("Database operation failed", "unknown")
            finally:
                await session.close()

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet (in-memory and dev databases)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

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
