"""
Domain models for occurrence desk.

Pydantic models for data from the REST API and internal processing.
These define the canonical schema - the API client normalizes responses to these.
The backend speaks camelCase; models accept either the alias or the field name.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Core
# =============================================================================


class PageMeta(BaseModel):
    """Pagination metadata returned alongside list endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total: int = 0
    page: int | None = None
    page_size: int | None = Field(default=None, alias="pageSize")


# =============================================================================
# Occurrences
# =============================================================================


class OccurrenceStatus(StrEnum):
    """Lifecycle status of an occurrence."""

    OPEN = "OPEN"
    RESOLVED = "RESOLVED"
    CANCELED = "CANCELED"


class Occurrence(BaseModel):
    """A reported occurrence, read-only on this side.

    ``status`` stays a plain string so values outside ``OccurrenceStatus``
    survive parsing; aggregation treats them as open.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(..., description="Backend identifier, monotonic with creation")
    created_at: datetime = Field(..., alias="createdAt")
    status: str = OccurrenceStatus.OPEN
    title: str | None = None
    description: str | None = None
    archived: bool = False


class OccurrencePage(BaseModel):
    """Response of the occurrence list endpoint."""

    data: list[Occurrence] = Field(default_factory=list)
    meta: PageMeta | None = None


# =============================================================================
# Users & session
# =============================================================================


class Role(StrEnum):
    """Account roles."""

    ADMIN = "ADMIN"
    USER = "USER"


class User(BaseModel):
    """A staff account."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    email: str
    role: Role = Role.USER
    deleted: bool = False


class UserPage(BaseModel):
    """Response of the user list endpoint."""

    data: list[User] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)


class Session(BaseModel):
    """Who is looking at the screen. Passed explicitly to guards and views."""

    signed: bool = False
    role: Role | None = None
    user_id: str | None = None
    token: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
