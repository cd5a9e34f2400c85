"""Identity Lookup — find teams, platforms, systems and cores by id or slug.

Invariants:
    - Unknown id/slug returns None; an empty IdOrSlug returns None without a query
    - resolve_filters raises ResourceNotFoundError for any reference that does
      not exist, so a typo never silently widens a listing

Design Decisions:
    - One generic helper over per-model lookups: every lookup-able model has
      integer id and unique slug columns
"""

from datetime import datetime
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import IdOrSlug
from catalog.core.errors import ResourceNotFoundError
from catalog.infrastructure.database import translate_storage_errors
from catalog.models import Core, Platform, System, Team
from catalog.schemas.core import CoreFilters

M = TypeVar("M", Team, Platform, System, Core)


async def find_by_id_or_slug(
    db: AsyncSession, model: type[M], identity: IdOrSlug,
) -> M | None:
    """Return the row of `model` matching the identity, or None."""
    if identity.id is not None:
        condition = model.id == identity.id
    elif identity.slug is not None:
        condition = model.slug == identity.slug
    else:
        return None
    with translate_storage_errors(f"lookup {model.__tablename__}"):
        result = await db.execute(select(model).where(condition))
        return result.scalar_one_or_none()


async def _require_id(
    db: AsyncSession, model: type[M], identity: IdOrSlug | None,
) -> int | None:
    if identity is None or identity.is_empty:
        return None
    row = await find_by_id_or_slug(db, model, identity)
    if row is None:
        raise ResourceNotFoundError(model.__name__, str(identity))
    return row.id


async def resolve_filters(
    db: AsyncSession,
    *,
    platform: IdOrSlug | None = None,
    system: IdOrSlug | None = None,
    team: IdOrSlug | None = None,
    release_date_ge: datetime | None = None,
) -> CoreFilters:
    """Turn id-or-slug filter references into a CoreFilters of ids."""
    return CoreFilters(
        platform_id=await _require_id(db, Platform, platform),
        system_id=await _require_id(db, System, system),
        team_id=await _require_id(db, Team, team),
        release_date_ge=release_date_ge,
    )
