"""Pydantic schemas for incidents: create/update payloads, list filters, responses and stats."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_title(value: str | None) -> str | None:
    """Title is the only required field; reject blank strings."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Title cannot be empty!")
    return value


class IncidentCreate(BaseModel):
    """Payload for POST /incidents. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., max_length=255, description="Short incident title (required).")
    description: str | None = Field(default=None, description="Free-text description.")
    published: bool = Field(default=False, description="Visible on the public listing.")
    year: int | None = Field(default=None, ge=1900, le=2100, description="Year the incident occurred.")
    type: str | None = Field(default=None, max_length=64, description="Incident category, e.g. technical.")
    status: str = Field(default="open", max_length=32, description="Workflow status.")
    date: datetime | None = Field(
        default=None,
        description="When the incident happened; defaults to the creation time.",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _validate_title(v)


class IncidentUpdate(BaseModel):
    """Partial update for PUT /incidents/{id}; only fields sent are changed."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    published: bool | None = None
    year: int | None = Field(default=None, ge=1900, le=2100)
    type: str | None = Field(default=None, max_length=64)
    status: str | None = Field(default=None, max_length=32)
    date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _validate_title(v)


class IncidentFilters(BaseModel):
    """Optional list filters; None means 'do not filter on this field'."""

    title: str | None = Field(default=None, description="Case-insensitive substring of the title.")
    year: int | None = None
    type: str | None = None
    status: str | None = None
    published: bool | None = None


class IncidentRead(BaseModel):
    """Incident as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    published: bool
    year: int | None
    type: str | None
    status: str | None
    date: datetime | None
    created_at: datetime
    updated_at: datetime


class TypeCount(BaseModel):
    type: str | None
    count: int


class StatusCount(BaseModel):
    status: str | None
    count: int


class YearCount(BaseModel):
    year: int | None
    count: int


class IncidentStats(BaseModel):
    """Aggregate counts for dashboards: totals plus group-by type, status and year."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., ge=0)
    published: int = Field(..., ge=0)
    unpublished: int = Field(..., ge=0)
    by_type: list[TypeCount] = Field(default_factory=list, alias="byType")
    by_status: list[StatusCount] = Field(default_factory=list, alias="byStatus")
    by_year: list[YearCount] = Field(default_factory=list, alias="byYear")
