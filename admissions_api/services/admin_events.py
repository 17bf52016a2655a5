"""Admin action events for side effects.

Services emit an event after their primary write is committed. Handlers
are best-effort and must not raise back into the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from fastapi import Request
from sqlalchemy.orm import Session

from admissions_api.db.enums import AuditAction, AuditResource


@dataclass(frozen=True)
class AdminActionEvent:
    actor_id: UUID
    action: AuditAction
    resource: AuditResource
    resource_id: UUID | str
    details: dict[str, Any] | None = None


def emit_admin_action(
    db: Session,
    event: AdminActionEvent,
    request: Request | None = None,
) -> None:
    """Dispatch admin action side effects (audit trail)."""
    from admissions_api.services import audit_service

    audit_service.log_admin_action(
        db,
        actor_id=event.actor_id,
        action=event.action,
        resource=event.resource,
        resource_id=event.resource_id,
        details=event.details,
        request=request,
    )
