"""Audit trail schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from admissions_api.schemas.common import CamelModel


class AuditLogRead(CamelModel):
    """Audit log entry for API response."""
    id: UUID
    user_id: UUID | None
    action: str
    resource: str
    resource_id: str | None
    metadata: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime


class AuditChainStatus(CamelModel):
    valid: bool
    checked: int
    broken_entry_id: UUID | None = None
