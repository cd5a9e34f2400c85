"""Tests for composite statement shape — joins, ordering and paging, no database."""

from sqlalchemy.dialects import postgresql, sqlite

from catalog.core.domain_types import LatestReleaseStrategy
from catalog.queries.composite import (
    composite_page_statement, systems_for_cores_statement,
)
from catalog.schemas.core import CoreFilters


def _sql(stmt, dialect=None) -> str:
    return str(stmt.compile(dialect=dialect or sqlite.dialect()))


def test_window_strategy_ranks_releases():
    sql = _sql(composite_page_statement(0, 10, CoreFilters()))
    assert "row_number() OVER (PARTITION BY ranked_release.core_id" in sql
    assert "ORDER BY ranked_release.date_released DESC, ranked_release.id DESC" in sql
    assert "LEFT OUTER JOIN core_releases" in sql


def test_correlated_strategy_uses_scalar_subquery():
    sql = _sql(composite_page_statement(
        0, 10, CoreFilters(), LatestReleaseStrategy.CORRELATED,
    ))
    assert "row_number" not in sql
    assert "candidate_release.core_id = cores.id" in sql
    assert "LIMIT ? OFFSET ?" in sql


def test_team_is_inner_joined_platform_outer_joined():
    sql = _sql(composite_page_statement(0, 10, CoreFilters()))
    assert "JOIN teams ON teams.id = cores.owner_team_id" in sql
    assert "LEFT OUTER JOIN teams" not in sql
    assert "LEFT OUTER JOIN platforms ON platforms.id = core_releases.platform_id" in sql


def test_primary_page_ordered_by_core_id():
    sql = _sql(composite_page_statement(2, 5, CoreFilters()))
    assert "ORDER BY cores.id" in sql


def test_offset_is_page_times_limit():
    stmt = composite_page_statement(3, 7, CoreFilters())
    compiled = stmt.compile(dialect=postgresql.dialect())
    assert 21 in compiled.params.values()
    assert 7 in compiled.params.values()


def test_systems_statement_scoped_by_core_ids():
    sql = _sql(systems_for_cores_statement((4, 2)))
    assert "core_systems.core_id IN" in sql
    assert "ORDER BY core_systems.core_id, systems.id" in sql
    assert "LIMIT" not in sql
