"""Report moderation service with audit logging."""

from uuid import UUID

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from admissions_api.db.enums import AuditAction, AuditResource, ReportStatus, ReportTargetType
from admissions_api.db.models import Report
from admissions_api.db.types import utcnow
from admissions_api.schemas.common import Page
from admissions_api.schemas.report import ReportRead
from admissions_api.services.admin_events import AdminActionEvent, emit_admin_action
from admissions_api.services.errors import ReportNotFoundError
from admissions_api.utils.pagination import PaginationParams, paginate_select


def list_reports(
    db: Session,
    pagination: PaginationParams,
    status: ReportStatus | None = None,
    target_type: ReportTargetType | None = None,
) -> Page[ReportRead]:
    """List reports newest first with a reporter summary."""
    stmt = select(Report)
    if status:
        stmt = stmt.where(Report.status == status.value)
    if target_type:
        stmt = stmt.where(Report.target_type == target_type.value)
    stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc())

    rows, total = paginate_select(
        db, stmt, pagination, options=(joinedload(Report.reporter),)
    )
    items = [ReportRead.model_validate(report) for (report,) in rows]
    return Page[ReportRead].create(items, total, pagination)


def _get_report_for_update(db: Session, report_id: UUID) -> Report:
    report = db.execute(
        select(Report).where(Report.id == report_id).with_for_update()
    ).scalar_one_or_none()
    if not report:
        raise ReportNotFoundError("Report not found")
    return report


def update_report_status(
    db: Session,
    admin_id: UUID,
    report_id: UUID,
    status: ReportStatus,
    resolution: str | None = None,
    request: Request | None = None,
) -> Report:
    """
    Set a report's status and (optionally) resolution.

    Any status may replace any other. resolved_at is stamped only when the
    new status is RESOLVED; an omitted resolution leaves the stored one.
    """
    report = _get_report_for_update(db, report_id)
    old_status = report.status
    now = utcnow()

    report.status = status.value
    if resolution is not None:
        report.resolution = resolution
    report.reviewed_by = admin_id
    report.reviewed_at = now
    if status == ReportStatus.RESOLVED:
        report.resolved_at = now

    db.commit()
    db.refresh(report)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.UPDATE_REPORT_STATUS,
            resource=AuditResource.REPORT,
            resource_id=report_id,
            details={
                "oldStatus": old_status,
                "newStatus": status.value,
                "resolution": resolution,
                "targetType": report.target_type,
                "targetId": report.target_id,
            },
        ),
        request=request,
    )
    return report


def delete_report(
    db: Session,
    admin_id: UUID,
    report_id: UUID,
    request: Request | None = None,
) -> None:
    """Hard-delete a report."""
    report = _get_report_for_update(db, report_id)
    details = {
        "targetType": report.target_type,
        "targetId": report.target_id,
        "reason": report.reason,
    }

    db.delete(report)
    db.commit()

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.DELETE_REPORT,
            resource=AuditResource.REPORT,
            resource_id=report_id,
            details=details,
        ),
        request=request,
    )
