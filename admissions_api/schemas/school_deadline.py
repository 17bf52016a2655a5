"""School deadline schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from admissions_api.db.enums import AdmissionRound
from admissions_api.schemas.common import CamelModel


class SchoolSummary(CamelModel):
    id: UUID
    name: str
    name_zh: str | None = None


class SchoolDeadlineCreate(CamelModel):
    school_id: UUID
    year: int = Field(..., ge=2000, le=2100)
    round: AdmissionRound
    application_deadline: date
    financial_aid_deadline: date | None = None
    decision_date: date | None = None
    essay_prompts: list[str] | None = None
    essay_count: int | None = Field(None, ge=0)
    interview_required: bool = False
    interview_deadline: date | None = None
    application_fee: int | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=5000)


class SchoolDeadlineUpdate(CamelModel):
    """Partial update; school, year and round are fixed once created."""
    application_deadline: date | None = None
    financial_aid_deadline: date | None = None
    decision_date: date | None = None
    essay_prompts: list[str] | None = None
    essay_count: int | None = Field(None, ge=0)
    interview_required: bool | None = None
    interview_deadline: date | None = None
    application_fee: int | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=5000)


class SchoolDeadlineRead(CamelModel):
    id: UUID
    school_id: UUID
    year: int
    round: str
    application_deadline: date
    financial_aid_deadline: date | None = None
    decision_date: date | None = None
    essay_prompts: list[str] | None = None
    essay_count: int | None = None
    interview_required: bool
    interview_deadline: date | None = None
    application_fee: int | None = None
    notes: str | None = None
    source: str
    created_at: datetime
    updated_at: datetime
    school: SchoolSummary | None = None
