"""Core Schemas — filters for composite listings and the core creation payload.

Invariants:
    - CoreFilters fields are all optional; an empty CoreFilters matches every core
    - CoreCreate.slug follows the shared slug pattern (core/domain_types.py)
    - metadata and links are JSON objects (dicts), never arrays or scalars

Design Decisions:
    - Filters carry resolved ids, not ORM objects: the query layer only needs keys
      (services/lookup.py resolves id-or-slug references into ids)
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.core.domain_types import MAX_SLUG_LENGTH, is_valid_slug


class CoreFilters(BaseModel):
    """Optional restrictions for list_composite, combined with AND."""
    model_config = ConfigDict(frozen=True)

    platform_id: int | None = None
    system_id: int | None = None
    team_id: int | None = None
    release_date_ge: datetime | None = None


class CoreCreate(BaseModel):
    """Core creation: validates slug format and non-empty name."""
    model_config = ConfigDict(frozen=True)

    slug: str = Field(min_length=1, max_length=MAX_SLUG_LENGTH)
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    links: dict[str, Any] = Field(default_factory=dict)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str) -> str:
        if (v.isascii() and v.isdigit()) or not is_valid_slug(v):
            raise ValueError(
                "slug must be lowercase letters, digits, '-' or '_' and not all digits",
            )
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v
