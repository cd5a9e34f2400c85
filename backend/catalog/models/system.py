"""System ORM — classification tag for the machines a core supports.

Invariants:
    - slug is unique and non-nullable
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class System(Base):
    """System entity (e.g. genesis, mastersystem)."""
    __tablename__ = "systems"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"System(id={self.id!r}, slug={self.slug!r})"
