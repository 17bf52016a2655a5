"""Report moderation schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from admissions_api.db.enums import ReportStatus, ReportTargetType, Role
from admissions_api.schemas.common import CamelModel


class ReporterSummary(CamelModel):
    id: UUID
    email: str
    role: Role


class ReportRead(CamelModel):
    id: UUID
    reporter_id: UUID
    target_type: ReportTargetType
    target_id: str
    reason: str
    detail: str | None = None
    context: dict[str, Any] | None = None
    status: ReportStatus
    resolution: str | None = None
    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    resolved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    reporter: ReporterSummary | None = None


class ReportUpdate(CamelModel):
    status: ReportStatus
    resolution: str | None = Field(None, max_length=2000)
