"""Platform ORM — hardware/software target a core release runs on.

Invariants:
    - slug is unique and non-nullable
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class Platform(Base):
    """Platform entity (e.g. linux-x64, mister-de10)."""
    __tablename__ = "platforms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Platform(id={self.id!r}, slug={self.slug!r})"
