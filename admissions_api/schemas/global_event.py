"""Global calendar event schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from admissions_api.db.enums import GlobalEventCategory
from admissions_api.schemas.common import CamelModel


class GlobalEventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    title_zh: str | None = Field(None, max_length=255)
    category: GlobalEventCategory
    event_date: date
    registration_deadline: date | None = None
    late_deadline: date | None = None
    result_date: date | None = None
    description: str | None = None
    description_zh: str | None = None
    url: str | None = Field(None, max_length=500)
    year: int = Field(..., ge=2000, le=2100)
    is_recurring: bool = True


class GlobalEventUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    title_zh: str | None = Field(None, max_length=255)
    category: GlobalEventCategory | None = None
    event_date: date | None = None
    registration_deadline: date | None = None
    late_deadline: date | None = None
    result_date: date | None = None
    description: str | None = None
    description_zh: str | None = None
    url: str | None = Field(None, max_length=500)
    year: int | None = Field(None, ge=2000, le=2100)
    is_recurring: bool | None = None
    is_active: bool | None = None


class GlobalEventRead(CamelModel):
    id: UUID
    title: str
    title_zh: str | None = None
    category: GlobalEventCategory
    event_date: date
    registration_deadline: date | None = None
    late_deadline: date | None = None
    result_date: date | None = None
    description: str | None = None
    description_zh: str | None = None
    url: str | None = None
    year: int
    is_recurring: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
