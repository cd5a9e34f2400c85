"""Predicate Builder — turns CoreFilters into SQL clauses for the composite query.

Invariants:
    - One clause per present filter; absent filters contribute nothing
    - Clauses are returned as an immutable tuple and combined with AND by
      Select.where(*clauses), so order of application never matters
    - platform_id and release_date_ge restrict the resolved latest release
      (queries/latest_release.py), not the full release history
    - system_id uses EXISTS on core_systems: a core linked to many systems
      still yields exactly one row

Design Decisions:
    - Pure function over a conditionally-extended query object: no hidden
      mutable builder state, easy to inspect in tests
"""

from sqlalchemy import ColumnElement, select

from catalog.models import Core, CoreRelease, CoreSystem, Platform
from catalog.schemas.core import CoreFilters


def build_core_predicates(filters: CoreFilters) -> tuple[ColumnElement[bool], ...]:
    """Build the AND-ed restriction clauses for a composite core listing."""
    clauses: list[ColumnElement[bool]] = []

    if filters.platform_id is not None:
        clauses.append(Platform.id == filters.platform_id)

    if filters.system_id is not None:
        clauses.append(
            select(CoreSystem.core_id)
            .where(CoreSystem.core_id == Core.id)
            .where(CoreSystem.system_id == filters.system_id)
            .exists()
        )

    if filters.team_id is not None:
        clauses.append(Core.owner_team_id == filters.team_id)

    if filters.release_date_ge is not None:
        clauses.append(CoreRelease.date_released >= filters.release_date_ge)

    return tuple(clauses)
