"""CoreSystem ORM — junction row for the Core <-> System many-to-many.

Invariants:
    - Composite primary key (core_id, system_id): no duplicate pairs
    - Both sides are foreign keys; dangling references fail the insert
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class CoreSystem(Base):
    """Junction row linking a core to a supported system."""
    __tablename__ = "core_systems"

    core_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cores.id"), primary_key=True,
    )
    system_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("systems.id"), primary_key=True,
    )
