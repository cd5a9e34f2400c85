"""Core Catalog — composite listings, single-core lookup and atomic core creation.

Invariants:
    - One AsyncSession per CoreCatalog; every method runs on that session only
    - list_composite issues exactly two SELECTs: the filtered, paginated
      primary page and one bulk systems fetch scoped to that page's core ids
    - The core-id tuple that scopes the systems fetch is the same object
      handed to group_by_parent: groups can never shift against their cores
    - Every listed core carries a systems list (empty, never missing)
    - create writes the core and all its junction rows in one transaction,
      or nothing
    - Storage failures surface as StorageError subclasses; no partial results

Design Decisions:
    - Page and its systems share the session's transaction; whether they see
      one snapshot depends on the engine isolation level
      (Settings.database_isolation_level)
    - Releaseless cores are listed with release=None, platform=None
      (latest release and platform are both outer-joined)
    - Release/platform filters look at the latest release only; see
      queries/latest_release.py
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import IdOrSlug, LatestReleaseStrategy
from catalog.core.errors import ErrorContext, MalformedFilterError
from catalog.core.grouping import group_by_parent
from catalog.infrastructure.database import to_storage_error, translate_storage_errors
from catalog.models import Core, CoreRelease, CoreSystem, Platform, System, Team
from catalog.queries.composite import (
    composite_page_statement, systems_for_cores_statement,
)
from catalog.schemas.core import CoreCreate, CoreFilters

logger = logging.getLogger(__name__)


@dataclass
class CoreListing:
    """Composite record: a core with its systems, team and latest release."""
    core: Core
    systems: list[System]
    team: Team
    release: CoreRelease | None = None
    platform: Platform | None = None


@dataclass
class CoreDetails:
    """A single core with its owning team and full system set."""
    core: Core
    team: Team
    systems: list[System] = field(default_factory=list)


class CoreCatalog:
    """Read and write operations over cores and their related records."""

    def __init__(
        self,
        db: AsyncSession,
        strategy: LatestReleaseStrategy = LatestReleaseStrategy.WINDOW,
        max_page_limit: int = 100,
        default_page_limit: int = 20,
    ):
        self.db = db
        self.strategy = strategy
        self.max_page_limit = max_page_limit
        self.default_page_limit = default_page_limit

    def _check_page(self, page: int, limit: int | None) -> int:
        if limit is None:
            limit = self.default_page_limit
        if page < 0:
            raise MalformedFilterError(f"page must be >= 0, got {page}", "page")
        if limit < 1 or limit > self.max_page_limit:
            raise MalformedFilterError(
                f"limit must be between 1 and {self.max_page_limit}, got {limit}",
                "limit",
            )
        return limit

    async def list_cores(self, page: int = 0, limit: int | None = None) -> list[Core]:
        """Plain paginated cores, ordered by id."""
        limit = self._check_page(page, limit)
        with translate_storage_errors("list cores"):
            result = await self.db.execute(
                select(Core).order_by(Core.id).offset(page * limit).limit(limit),
            )
            return list(result.scalars().all())

    async def list_with_teams(
        self, page: int = 0, limit: int | None = None,
    ) -> list[tuple[Core, Team]]:
        """Paginated cores with their owning team."""
        limit = self._check_page(page, limit)
        with translate_storage_errors("list cores with teams"):
            result = await self.db.execute(
                select(Core, Team)
                .join(Team, Team.id == Core.owner_team_id)
                .order_by(Core.id)
                .offset(page * limit)
                .limit(limit),
            )
            return [(core, team) for core, team in result.all()]

    async def fetch_systems_grouped(
        self, core_ids: tuple[int, ...],
    ) -> list[list[System]]:
        """Fetch systems for the given cores in one query, grouped in core_ids order."""
        if not core_ids:
            return []
        with translate_storage_errors("fetch core systems"):
            result = await self.db.execute(systems_for_cores_statement(core_ids))
            rows = result.all()
        return group_by_parent(core_ids, ((core_id, system) for core_id, system in rows))

    async def list_composite(
        self, page: int = 0, limit: int | None = None, filters: CoreFilters | None = None,
    ) -> list[CoreListing]:
        """List one page of cores with systems, team, latest release and platform."""
        limit = self._check_page(page, limit)
        if filters is None:
            filters = CoreFilters()

        with translate_storage_errors("list composite cores"):
            result = await self.db.execute(
                composite_page_statement(page, limit, filters, self.strategy),
            )
            page_rows = result.all()

        core_ids = tuple(row[0].id for row in page_rows)
        system_groups = await self.fetch_systems_grouped(core_ids)

        logger.debug(
            f"Listed {len(page_rows)} composite cores",
            extra={"page": page, "limit": limit, "row_count": len(page_rows)},
        )
        return [
            CoreListing(
                core=core, systems=systems, team=team,
                release=release, platform=platform,
            )
            for (core, team, release, platform), systems
            in zip(page_rows, system_groups)
        ]

    async def get_one(self, identity: IdOrSlug) -> CoreDetails | None:
        """Resolve one core by id or slug with its team and systems; None if absent."""
        query = select(Core, Team).join(Team, Team.id == Core.owner_team_id)
        if identity.id is not None:
            query = query.where(Core.id == identity.id)
        elif identity.slug is not None:
            query = query.where(Core.slug == identity.slug)
        else:
            return None

        with translate_storage_errors("get core"):
            result = await self.db.execute(query)
            row = result.first()
            if row is None:
                return None
            core, team = row

            systems = await self.db.execute(
                select(System)
                .join(CoreSystem, CoreSystem.system_id == System.id)
                .where(CoreSystem.core_id == core.id)
                .order_by(System.id),
            )
            return CoreDetails(
                core=core, team=team, systems=list(systems.scalars().all()),
            )

    async def create(
        self,
        data: CoreCreate,
        systems: Sequence[System],
        owner_team: Team,
    ) -> Core:
        """Insert a core and its system links atomically."""
        system_ids = list(dict.fromkeys(s.id for s in systems))
        core = Core(
            slug=data.slug,
            name=data.name,
            description=data.description,
            metadata_=dict(data.metadata),
            links=dict(data.links),
            owner_team_id=owner_team.id,
        )
        try:
            self.db.add(core)
            await self.db.flush()
            if system_ids:
                await self.db.execute(
                    insert(CoreSystem),
                    [
                        {"core_id": core.id, "system_id": system_id}
                        for system_id in system_ids
                    ],
                )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            error = to_storage_error(
                e, "create core", ErrorContext(slug=data.slug),
            )
            logger.warning(
                f"Failed to create core '{data.slug}': {error.message}",
                extra={"slug": data.slug, "error_code": error.code},
            )
            raise error from e

        logger.info(
            f"Created core '{core.slug}' with {len(system_ids)} system(s)",
            extra={"core_id": core.id, "slug": core.slug},
        )
        return core
