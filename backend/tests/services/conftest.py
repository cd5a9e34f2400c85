"""Service test fixtures — async in-memory SQLite catalog with seeded reference rows.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - Reference rows (teams, platforms, systems) seeded once per test via catalog_refs
    - make_core inserts a core with system links and releases in one commit

Design Decisions:
    - SQLite in-memory: fast, no external dependency; window functions and
      correlated subqueries both supported by the bundled SQLite
    - statements fixture records every SQL statement the engine executes,
      so tests can assert on query counts
"""

from types import SimpleNamespace

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.db.base import Base
from catalog.infrastructure.database import build_engine
from catalog.models import Core, CoreRelease, CoreSystem, Platform, System, Team


@pytest.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def statements(test_engine):
    """Capture SQL statements executed after the fixture is requested."""
    captured: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", _record)
    yield captured
    event.remove(test_engine.sync_engine, "before_cursor_execute", _record)


@pytest.fixture
async def catalog_refs(test_db):
    """Insert teams, platforms and systems shared by the catalog tests."""
    refs = SimpleNamespace(
        t1=Team(slug="t1", name="Team One"),
        t2=Team(slug="t2", name="Team Two"),
        linux=Platform(slug="linux-x64", name="Linux x64"),
        mister=Platform(slug="mister", name="MiSTer"),
        genesis=System(slug="genesis", name="Sega Genesis"),
        mastersystem=System(slug="mastersystem", name="Sega Master System"),
        nes=System(slug="nes", name="Nintendo Entertainment System"),
    )
    test_db.add_all(vars(refs).values())
    await test_db.commit()
    return refs


@pytest.fixture
def make_core(test_db):
    """Factory: insert a core with systems and (platform, date[, id]) releases."""

    async def _make(slug, team, systems=(), releases=()):
        core = Core(
            slug=slug, name=slug.title(), description=f"{slug} core",
            metadata_={}, links={}, owner_team_id=team.id,
        )
        test_db.add(core)
        await test_db.flush()
        for system in systems:
            test_db.add(CoreSystem(core_id=core.id, system_id=system.id))
        for release in releases:
            platform, date_released, *release_id = release
            release_row = CoreRelease(
                core_id=core.id,
                platform_id=platform.id,
                date_released=date_released,
            )
            if release_id:
                release_row.id = release_id[0]
            test_db.add(release_row)
        await test_db.commit()
        return core

    return _make
