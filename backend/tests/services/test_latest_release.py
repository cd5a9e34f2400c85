"""Latest Release Resolution — ordering, tie-breaks and the latest-only date filter.

Invariants:
    - Later date_released wins regardless of id
    - Equal dates: greater id wins
    - release_date_ge is checked against the latest release only
    - WINDOW and CORRELATED strategies agree on every case
"""

from datetime import datetime

import pytest

from catalog.core.domain_types import LatestReleaseStrategy
from catalog.schemas.core import CoreFilters
from catalog.services.core_catalog import CoreCatalog

STRATEGIES = [LatestReleaseStrategy.WINDOW, LatestReleaseStrategy.CORRELATED]


@pytest.mark.parametrize("strategy", STRATEGIES)
async def test_later_date_wins_over_higher_id(
    test_db, catalog_refs, make_core, strategy,
):
    refs = catalog_refs
    await make_core("c", refs.t1, releases=[
        (refs.linux, datetime(2020, 1, 1), 5),
        (refs.mister, datetime(2021, 1, 1), 3),
    ])

    [listing] = await CoreCatalog(test_db, strategy).list_composite(0, 10)

    assert listing.release.id == 3
    assert listing.platform.slug == "mister"


@pytest.mark.parametrize("strategy", STRATEGIES)
async def test_equal_dates_break_ties_by_id(
    test_db, catalog_refs, make_core, strategy,
):
    refs = catalog_refs
    await make_core("c", refs.t1, releases=[
        (refs.linux, datetime(2022, 3, 1), 7),
        (refs.mister, datetime(2022, 3, 1), 9),
        (refs.linux, datetime(2022, 3, 1), 8),
    ])

    [listing] = await CoreCatalog(test_db, strategy).list_composite(0, 10)

    assert listing.release.id == 9


@pytest.mark.parametrize("strategy", STRATEGIES)
async def test_date_filter_only_sees_latest_release(
    test_db, catalog_refs, make_core, strategy,
):
    """A core whose only release is older than the threshold is excluded."""
    refs = catalog_refs
    await make_core("old", refs.t1, releases=[(refs.linux, datetime(2021, 6, 1))])
    await make_core("new", refs.t1, releases=[(refs.linux, datetime(2022, 2, 1))])

    listings = await CoreCatalog(test_db, strategy).list_composite(
        0, 10, CoreFilters(release_date_ge=datetime(2022, 1, 1)),
    )

    assert [x.core.slug for x in listings] == ["new"]


@pytest.mark.parametrize("strategy", STRATEGIES)
async def test_date_filter_boundary_uses_resolved_release(
    test_db, catalog_refs, make_core, strategy,
):
    """The threshold is inclusive and is compared with the tie-broken latest release."""
    refs = catalog_refs
    await make_core("c", refs.t1, releases=[
        (refs.linux, datetime(2022, 5, 1), 1),
        (refs.linux, datetime(2022, 5, 1), 2),
    ])

    at_threshold = await CoreCatalog(test_db, strategy).list_composite(
        0, 10, CoreFilters(release_date_ge=datetime(2022, 5, 1)),
    )
    past_threshold = await CoreCatalog(test_db, strategy).list_composite(
        0, 10, CoreFilters(release_date_ge=datetime(2022, 5, 2)),
    )

    assert [x.release.id for x in at_threshold] == [2]
    assert past_threshold == []


async def test_strategies_agree(test_db, catalog_refs, make_core):
    refs = catalog_refs
    await make_core("none", refs.t1)
    await make_core("one", refs.t2, releases=[(refs.mister, datetime(2019, 1, 1))])
    await make_core("many", refs.t1, systems=[refs.nes], releases=[
        (refs.linux, datetime(2020, 1, 1)),
        (refs.mister, datetime(2024, 1, 1)),
        (refs.linux, datetime(2023, 1, 1)),
    ])

    def summary(listings):
        return [
            (x.core.slug, x.release.id if x.release else None,
             x.platform.slug if x.platform else None)
            for x in listings
        ]

    window = await CoreCatalog(test_db, LatestReleaseStrategy.WINDOW).list_composite(0, 10)
    correlated = await CoreCatalog(
        test_db, LatestReleaseStrategy.CORRELATED,
    ).list_composite(0, 10)

    assert summary(window) == summary(correlated)
    assert summary(window)[0] == ("none", None, None)
    assert summary(window)[2][2] == "mister"
