"""Admin router - moderation, user management, audit trail and calendar data.

Every endpoint requires the ADMIN role.
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from admissions_api.core.deps import get_db, require_admin
from admissions_api.db.enums import (
    AuditAction,
    AuditResource,
    GlobalEventCategory,
    ReportStatus,
    ReportTargetType,
    Role,
)
from admissions_api.schemas.audit import AuditChainStatus, AuditLogRead
from admissions_api.schemas.auth import UserSession
from admissions_api.schemas.common import MessageResponse, Page
from admissions_api.schemas.global_event import (
    GlobalEventCreate,
    GlobalEventRead,
    GlobalEventUpdate,
)
from admissions_api.schemas.report import ReportRead, ReportUpdate
from admissions_api.schemas.school_deadline import (
    SchoolDeadlineCreate,
    SchoolDeadlineRead,
    SchoolDeadlineUpdate,
)
from admissions_api.schemas.stats import AdminStats
from admissions_api.schemas.user import (
    AdminUserRead,
    UserBanRequest,
    UserBanResult,
    UserRoleResult,
    UserRoleUpdate,
)
from admissions_api.services import (
    audit_service,
    deadline_service,
    global_event_service,
    report_service,
    stats_service,
    user_admin_service,
)
from admissions_api.services.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from admissions_api.utils.pagination import (
    PaginationParams,
    get_calendar_pagination,
    get_pagination,
)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


# ============================================================================
# Stats
# ============================================================================

@router.get("/stats", response_model=AdminStats)
def get_stats(db: Session = Depends(get_db)):
    """Dashboard counters."""
    return stats_service.get_stats(db)


# ============================================================================
# Reports
# ============================================================================

@router.get("/reports", response_model=Page[ReportRead])
def list_reports(
    status_filter: ReportStatus | None = Query(None, alias="status"),
    target_type: ReportTargetType | None = Query(None, alias="targetType"),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    return report_service.list_reports(
        db, pagination, status=status_filter, target_type=target_type
    )


@router.put("/reports/{report_id}", response_model=ReportRead)
def update_report(
    report_id: UUID,
    data: ReportUpdate,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Change a report's status. Any status may follow any other."""
    try:
        return report_service.update_report_status(
            db,
            admin_id=session.user_id,
            report_id=report_id,
            status=data.status,
            resolution=data.resolution,
            request=request,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/reports/{report_id}", response_model=MessageResponse)
def delete_report(
    report_id: UUID,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        report_service.delete_report(
            db, admin_id=session.user_id, report_id=report_id, request=request
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Report deleted")


# ============================================================================
# Users
# ============================================================================

@router.get("/users", response_model=Page[AdminUserRead])
def list_users(
    search: str | None = Query(None, max_length=255, description="Email substring"),
    role: Role | None = Query(None),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    return user_admin_service.list_users(db, pagination, search=search, role=role)


@router.put("/users/{user_id}/role", response_model=UserRoleResult)
def update_user_role(
    user_id: UUID,
    data: UserRoleUpdate,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return user_admin_service.update_user_role(
            db,
            admin_id=session.user_id,
            user_id=user_id,
            role=data.role,
            request=request,
        )
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: UUID,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Soft-delete a user. Their sessions stop working immediately."""
    try:
        user_admin_service.delete_user(
            db, admin_id=session.user_id, user_id=user_id, request=request
        )
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="User deleted")


@router.post("/users/{user_id}/ban", response_model=UserBanResult)
def ban_user(
    user_id: UUID,
    data: UserBanRequest,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return user_admin_service.ban_user(
            db,
            admin_id=session.user_id,
            user_id=user_id,
            reason=data.reason,
            duration_hours=data.duration_hours,
            permanent=data.permanent,
            request=request,
        )
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/users/{user_id}/unban", response_model=UserBanResult)
def unban_user(
    user_id: UUID,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return user_admin_service.unban_user(
            db, admin_id=session.user_id, user_id=user_id, request=request
        )
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ============================================================================
# Audit logs
# ============================================================================

@router.get("/audit-logs", response_model=Page[AuditLogRead])
def list_audit_logs(
    admin_id: UUID | None = Query(None, alias="adminId", description="Filter by actor"),
    action: AuditAction | None = Query(None),
    resource: AuditResource | None = Query(None),
    start_date: datetime | None = Query(
        None, alias="startDate", description="Filter entries at or after this time"
    ),
    end_date: datetime | None = Query(
        None, alias="endDate", description="Filter entries at or before this time"
    ),
    pagination: PaginationParams = Depends(get_calendar_pagination),
    db: Session = Depends(get_db),
):
    """List audit entries, newest first."""
    return audit_service.list_audit_logs(
        db,
        pagination,
        actor_id=admin_id,
        action=action.value if action else None,
        resource=resource.value if resource else None,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/audit-logs/verify", response_model=AuditChainStatus)
def verify_audit_chain(db: Session = Depends(get_db)):
    """Recompute the hash chain and report the first broken entry, if any."""
    return audit_service.verify_audit_chain(db)


# ============================================================================
# School deadlines
# ============================================================================

@router.get("/school-deadlines", response_model=Page[SchoolDeadlineRead])
def list_school_deadlines(
    school_id: UUID | None = Query(None, alias="schoolId"),
    year: int | None = Query(None, ge=2000, le=2100),
    pagination: PaginationParams = Depends(get_calendar_pagination),
    db: Session = Depends(get_db),
):
    return deadline_service.list_school_deadlines(
        db, pagination, school_id=school_id, year=year
    )


@router.post(
    "/school-deadlines",
    response_model=SchoolDeadlineRead,
    status_code=status.HTTP_201_CREATED,
)
def create_school_deadline(
    data: SchoolDeadlineCreate,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return deadline_service.create_school_deadline(
            db, admin_id=session.user_id, data=data, request=request
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/school-deadlines/{deadline_id}", response_model=SchoolDeadlineRead)
def update_school_deadline(
    deadline_id: UUID,
    data: SchoolDeadlineUpdate,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return deadline_service.update_school_deadline(
            db,
            admin_id=session.user_id,
            deadline_id=deadline_id,
            data=data,
            request=request,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/school-deadlines/{deadline_id}", response_model=MessageResponse)
def delete_school_deadline(
    deadline_id: UUID,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        deadline_service.delete_school_deadline(
            db, admin_id=session.user_id, deadline_id=deadline_id, request=request
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Deadline deleted")


# ============================================================================
# Global events
# ============================================================================

@router.get("/global-events", response_model=Page[GlobalEventRead])
def list_global_events(
    category: GlobalEventCategory | None = Query(None),
    year: int | None = Query(None, ge=2000, le=2100),
    pagination: PaginationParams = Depends(get_calendar_pagination),
    db: Session = Depends(get_db),
):
    return global_event_service.list_global_events(
        db, pagination, category=category, year=year
    )


@router.post(
    "/global-events",
    response_model=GlobalEventRead,
    status_code=status.HTTP_201_CREATED,
)
def create_global_event(
    data: GlobalEventCreate,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return global_event_service.create_global_event(
        db, admin_id=session.user_id, data=data, request=request
    )


@router.put("/global-events/{event_id}", response_model=GlobalEventRead)
def update_global_event(
    event_id: UUID,
    data: GlobalEventUpdate,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return global_event_service.update_global_event(
            db,
            admin_id=session.user_id,
            event_id=event_id,
            data=data,
            request=request,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/global-events/{event_id}", response_model=MessageResponse)
def delete_global_event(
    event_id: UUID,
    request: Request,
    session: UserSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        global_event_service.delete_global_event(
            db, admin_id=session.user_id, event_id=event_id, request=request
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Event deleted")
