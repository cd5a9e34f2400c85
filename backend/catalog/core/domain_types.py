"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Entity ids are opaque integers, unique within their kind
    - IdOrSlug carries at most one of id/slug; carrying neither means "matches nothing"
    - Slugs match SLUG_PATTERN and are at most MAX_SLUG_LENGTH characters
    - All-digit (ASCII) strings always parse as ids, never as slugs

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - IdOrSlug as a frozen dataclass: hashable, safe to pass between layers
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import NewType

from catalog.core.errors import MalformedFilterError


# ─── Identity Types ──────────────────────────────────────────────

TeamId = NewType("TeamId", int)
PlatformId = NewType("PlatformId", int)
SystemId = NewType("SystemId", int)
CoreId = NewType("CoreId", int)
ReleaseId = NewType("ReleaseId", int)

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
MAX_SLUG_LENGTH = 64


def is_valid_slug(value: str) -> bool:
    return len(value) <= MAX_SLUG_LENGTH and bool(SLUG_PATTERN.match(value))


@dataclass(frozen=True)
class IdOrSlug:
    """Reference to a row by numeric id or by slug."""
    id: int | None = None
    slug: str | None = None

    def __post_init__(self):
        if self.id is not None and self.slug is not None:
            raise MalformedFilterError(
                "Supply either an id or a slug, not both", "identity",
            )

    @classmethod
    def parse(cls, raw: str | int) -> "IdOrSlug":
        """Parse user input: digits become an id, anything else must be a slug."""
        if isinstance(raw, int):
            return cls(id=raw)
        value = raw.strip()
        if value.isascii() and value.isdigit():
            return cls(id=int(value))
        if not is_valid_slug(value):
            raise MalformedFilterError(
                f"'{raw}' is neither a numeric id nor a valid slug", "identity",
            )
        return cls(slug=value)

    @property
    def is_empty(self) -> bool:
        return self.id is None and self.slug is None

    def __str__(self) -> str:
        if self.id is not None:
            return str(self.id)
        return self.slug or ""


# ─── Enums ───────────────────────────────────────────────────────

class LatestReleaseStrategy(str, Enum):
    """How the latest release per core is resolved in SQL."""
    WINDOW = "window"
    CORRELATED = "correlated"
