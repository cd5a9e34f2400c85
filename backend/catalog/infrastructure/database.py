"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Every session is closed on every exit path
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StorageError subclasses (core/errors.py)
    - SQLite connections enforce foreign keys (PRAGMA foreign_keys=ON)

Design Decisions:
    - No module-level manager: catalog_lifespan (lifecycle.py) owns the
      instance and disposes the engine on shutdown
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only for server databases: SQLite uses its own pool classes
"""

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncGenerator, Iterator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, InterfaceError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from catalog.core.errors import (
    ConstraintViolationError, ErrorContext, ReferentialIntegrityError,
    SlugConflictError, StorageError, StorageUnavailableError,
)

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE classes for integrity failures
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def _integrity_kind(exc: IntegrityError) -> str:
    """Classify an IntegrityError as 'unique', 'foreign_key' or 'unknown'."""
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if code == _UNIQUE_VIOLATION:
        return "unique"
    if code == _FOREIGN_KEY_VIOLATION:
        return "foreign_key"
    detail = str(exc.orig).upper()
    if "UNIQUE" in detail or "DUPLICATE KEY" in detail:
        return "unique"
    if "FOREIGN KEY" in detail:
        return "foreign_key"
    return "unknown"


def to_storage_error(
    exc: SQLAlchemyError, operation: str, context: ErrorContext | None = None,
) -> StorageError:
    """Translate a SQLAlchemy exception into the catalog error hierarchy."""
    if isinstance(exc, IntegrityError):
        kind = _integrity_kind(exc)
        if kind == "unique" and "SLUG" in str(exc.orig).upper():
            slug = context.slug if context else None
            return SlugConflictError(slug, operation, context)
        if kind == "foreign_key":
            return ReferentialIntegrityError(
                "referenced row does not exist", operation, context,
            )
        return ConstraintViolationError(
            "integrity constraint violated", operation, kind, context=context,
        )
    if isinstance(exc, (OperationalError, InterfaceError)):
        return StorageUnavailableError(
            "connection or operational error", operation, context,
        )
    if isinstance(exc, DBAPIError):
        if exc.connection_invalidated:
            return StorageUnavailableError(
                "connection lost", operation, context,
            )
        return StorageError("database driver error", operation, context=context)
    return StorageError("database operation failed", operation, context=context)


@contextmanager
def translate_storage_errors(
    operation: str, context: ErrorContext | None = None,
) -> Iterator[None]:
    """Re-raise SQLAlchemy exceptions from the block as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        error = to_storage_error(e, operation, context)
        logger.error(
            f"DB {operation} failed: {e}",
            extra={"operation": operation, "error_code": error.code},
        )
        raise error from e


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite connection of this engine."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(
    database_url: str,
    pool_size: int = 20,
    max_overflow: int = 10,
    isolation_level: str | None = None,
) -> AsyncEngine:
    """Create the async engine with pool settings appropriate for the backend."""
    kwargs: dict = {"pool_pre_ping": True}
    if isolation_level:
        kwargs["isolation_level"] = isolation_level
    is_sqlite = database_url.startswith("sqlite")
    if not is_sqlite:
        kwargs.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    engine = create_async_engine(database_url, **kwargs)
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        isolation_level: str | None = None,
    ):
        self.engine = build_engine(
            database_url, pool_size, max_overflow, isolation_level,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_storage_error(e, "session")
            logger.error(
                f"DB error in session: {e}", extra={"error_code": error.code},
            )
            raise error from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (StorageError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
