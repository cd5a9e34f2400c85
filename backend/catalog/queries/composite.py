"""Composite Statements — full SELECTs used by the core catalog service.

Invariants:
    - Primary listing is ordered by cores.id: pages are stable and concatenate
      without gaps or duplicates
    - OFFSET/LIMIT apply to the primary statement only, never to the child fetch
    - The systems statement is scoped by an explicit core-id list and ordered
      by (core_id, system id) so groups come out deterministic
"""

from typing import Sequence

from sqlalchemy import Select, select

from catalog.core.domain_types import LatestReleaseStrategy
from catalog.models import Core, CoreRelease, CoreSystem, Platform, System, Team
from catalog.queries.latest_release import attach_latest_release
from catalog.queries.predicates import build_core_predicates
from catalog.schemas.core import CoreFilters


def composite_page_statement(
    page: int,
    limit: int,
    filters: CoreFilters,
    strategy: LatestReleaseStrategy = LatestReleaseStrategy.WINDOW,
) -> Select:
    """SELECT (Core, Team, CoreRelease?, Platform?) for one filtered page."""
    stmt = (
        select(Core, Team, CoreRelease, Platform)
        .select_from(Core)
        .join(Team, Team.id == Core.owner_team_id)
    )
    stmt = attach_latest_release(stmt, strategy)
    return (
        stmt
        .where(*build_core_predicates(filters))
        .order_by(Core.id)
        .offset(page * limit)
        .limit(limit)
    )


def systems_for_cores_statement(core_ids: Sequence[int]) -> Select:
    """SELECT (core_id, System) for every system linked to the given cores."""
    return (
        select(CoreSystem.core_id, System)
        .join(System, System.id == CoreSystem.system_id)
        .where(CoreSystem.core_id.in_(core_ids))
        .order_by(CoreSystem.core_id, System.id)
    )
