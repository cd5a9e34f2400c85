"""ORM Models — SQLAlchemy declarative models for all catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Core is the aggregate root; releases and system links hang off cores.id
    - No relationship() attributes: composite views are assembled explicitly
      by the query layer, never by lazy loading

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from catalog.models.team import Team  # noqa: F401
from catalog.models.platform import Platform  # noqa: F401
from catalog.models.system import System  # noqa: F401
from catalog.models.core import Core  # noqa: F401
from catalog.models.core_system import CoreSystem  # noqa: F401
from catalog.models.core_release import CoreRelease  # noqa: F401
