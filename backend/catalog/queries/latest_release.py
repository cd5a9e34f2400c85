"""Latest-Release Resolver — attach each core's most recent release and its platform.

Invariants:
    - At most one release per core: greatest (date_released, id)
    - Both the release and the platform are OUTER joins: cores without any
      release stay in the result with release and platform set to None
    - The ranking takes no filter input; filters on CoreRelease/Platform
      (queries/predicates.py) apply to the already-resolved latest release,
      so a core whose latest release predates release_date_ge is excluded
      even when an older release would have matched
    - WINDOW and CORRELATED strategies return identical rows

Design Decisions:
    - WINDOW (default): ROW_NUMBER() partitioned by core_id, joined on rank 1.
      One pass over core_releases, supported by PostgreSQL and SQLite >= 3.25
    - CORRELATED: per-core scalar subquery (ORDER BY ... LIMIT 1) for stores
      without window functions
    - The ranking subqueries use an alias of core_releases so the outer
      CoreRelease entity stays free for predicates and result mapping
"""

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import aliased

from catalog.core.domain_types import LatestReleaseStrategy
from catalog.models import Core, CoreRelease, Platform


def _latest_release_ordering(release):
    return (release.date_released.desc(), release.id.desc())


def _join_by_window(stmt: Select) -> Select:
    ranked_release = aliased(CoreRelease, name="ranked_release")
    ranked = (
        select(
            ranked_release.id.label("release_id"),
            ranked_release.core_id.label("core_id"),
            func.row_number().over(
                partition_by=ranked_release.core_id,
                order_by=_latest_release_ordering(ranked_release),
            ).label("release_rank"),
        )
        .subquery("ranked_releases")
    )
    return (
        stmt
        .outerjoin(
            ranked,
            and_(ranked.c.core_id == Core.id, ranked.c.release_rank == 1),
        )
        .outerjoin(CoreRelease, CoreRelease.id == ranked.c.release_id)
    )


def _join_by_correlated_subquery(stmt: Select) -> Select:
    candidate = aliased(CoreRelease, name="candidate_release")
    latest_id = (
        select(candidate.id)
        .where(candidate.core_id == Core.id)
        .order_by(*_latest_release_ordering(candidate))
        .limit(1)
        .correlate(Core)
        .scalar_subquery()
    )
    return stmt.outerjoin(CoreRelease, CoreRelease.id == latest_id)


def attach_latest_release(
    stmt: Select,
    strategy: LatestReleaseStrategy = LatestReleaseStrategy.WINDOW,
) -> Select:
    """Outer-join the latest CoreRelease and its Platform onto a Core select."""
    if strategy is LatestReleaseStrategy.CORRELATED:
        stmt = _join_by_correlated_subquery(stmt)
    else:
        stmt = _join_by_window(stmt)
    return stmt.outerjoin(Platform, Platform.id == CoreRelease.platform_id)
