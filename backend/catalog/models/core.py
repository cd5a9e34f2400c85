"""Core ORM — the primary catalog entry.

Invariants:
    - Always owned by exactly one Team (owner_team_id NOT NULL, FK)
    - slug is unique; collisions surface as SlugConflictError on create
    - metadata and links are free-form JSON objects

Design Decisions:
    - Python attribute metadata_ maps to the "metadata" column: DeclarativeBase
      reserves the metadata attribute for table metadata
"""

from sqlalchemy import Integer, String, Text, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class Core(Base):
    """Core entity: aggregate root for releases and supported systems."""
    __tablename__ = "cores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    metadata_: Mapped[dict] = mapped_column(
        "metadata", JSON, nullable=False, default=dict,
    )
    links: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    owner_team_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("teams.id"), nullable=False,
    )

    def __repr__(self) -> str:
        return f"Core(id={self.id!r}, slug={self.slug!r})"
