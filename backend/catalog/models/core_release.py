"""CoreRelease ORM — a versioned artifact of a core for one platform.

Invariants:
    - Belongs to exactly one Core and one Platform (both FK, non-nullable)
    - The latest release of a core is max(date_released), ties broken by max(id)
      (see queries/latest_release.py)

Design Decisions:
    - date_released is a naive timestamp: releases are published in UTC and
      compared as such by the release-date filter
    - Composite index (core_id, date_released, id) backs the latest-release ranking
"""

from datetime import datetime

from sqlalchemy import Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class CoreRelease(Base):
    """Release of a core on a platform."""
    __tablename__ = "core_releases"
    __table_args__ = (
        Index("ix_core_releases_latest", "core_id", "date_released", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    core_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cores.id"), nullable=False,
    )
    platform_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("platforms.id"), nullable=False,
    )
    date_released: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return (
            f"CoreRelease(id={self.id!r}, core_id={self.core_id!r}, "
            f"date_released={self.date_released!r})"
        )
