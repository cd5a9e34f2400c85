"""Team ORM — the group that owns and maintains cores.

Invariants:
    - slug is unique and non-nullable
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class Team(Base):
    """Team entity, owner of zero or more cores."""
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, slug={self.slug!r})"
