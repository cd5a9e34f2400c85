"""Catalog Lifecycle — startup/shutdown for processes embedding the catalog.

Invariants:
    - Logging configured once, before the engine is created
    - The engine is disposed on every exit path
    - Nothing is stored at module level: the caller holds the yielded manager

Design Decisions:
    - Async context manager so a web framework lifespan (or a script) can
      wrap it directly
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import Settings, get_settings
from catalog.infrastructure.database import DatabaseSessionManager
from catalog.infrastructure.observability import setup_logging
from catalog.services.core_catalog import CoreCatalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def catalog_lifespan(
    settings: Settings | None = None,
) -> AsyncGenerator[DatabaseSessionManager, None]:
    """Configure logging, open the connection pool, dispose it on exit."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        isolation_level=settings.database_isolation_level,
    )
    logger.info("Catalog started")
    try:
        yield manager
    finally:
        await manager.dispose()
        logger.info("Catalog shut down")


def make_core_catalog(db: AsyncSession, settings: Settings | None = None) -> CoreCatalog:
    """Build a CoreCatalog for one request-scoped session."""
    settings = settings or get_settings()
    return CoreCatalog(
        db,
        strategy=settings.latest_release_strategy,
        max_page_limit=settings.max_page_limit,
        default_page_limit=settings.default_page_limit,
    )
