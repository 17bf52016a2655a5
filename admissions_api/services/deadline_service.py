"""School deadline service - per-school admission calendar."""

import logging
from uuid import UUID

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from admissions_api.db.enums import AuditAction, AuditResource, DeadlineSource
from admissions_api.db.models import School, SchoolDeadline
from admissions_api.schemas.common import Page
from admissions_api.schemas.school_deadline import (
    SchoolDeadlineCreate,
    SchoolDeadlineRead,
    SchoolDeadlineUpdate,
)
from admissions_api.services.admin_events import AdminActionEvent, emit_admin_action
from admissions_api.services.errors import (
    DuplicateSchoolDeadlineError,
    SchoolDeadlineNotFoundError,
    SchoolNotFoundError,
)
from admissions_api.utils.pagination import PaginationParams, paginate_select

logger = logging.getLogger(__name__)

# Columns that cannot be cleared with an explicit null
NON_NULLABLE_FIELDS = {"application_deadline", "interview_required"}


def list_school_deadlines(
    db: Session,
    pagination: PaginationParams,
    school_id: UUID | None = None,
    year: int | None = None,
) -> Page[SchoolDeadlineRead]:
    """List deadlines soonest first, each with its school summary."""
    stmt = select(SchoolDeadline)
    if school_id:
        stmt = stmt.where(SchoolDeadline.school_id == school_id)
    if year:
        stmt = stmt.where(SchoolDeadline.year == year)
    stmt = stmt.order_by(SchoolDeadline.application_deadline.asc(), SchoolDeadline.id.asc())

    rows, total = paginate_select(
        db, stmt, pagination, options=(joinedload(SchoolDeadline.school),)
    )
    items = [SchoolDeadlineRead.model_validate(deadline) for (deadline,) in rows]
    return Page[SchoolDeadlineRead].create(items, total, pagination)


def _get_deadline_for_update(db: Session, deadline_id: UUID) -> SchoolDeadline:
    deadline = db.execute(
        select(SchoolDeadline).where(SchoolDeadline.id == deadline_id).with_for_update()
    ).scalar_one_or_none()
    if not deadline:
        raise SchoolDeadlineNotFoundError("Deadline not found")
    return deadline


def create_school_deadline(
    db: Session,
    admin_id: UUID,
    data: SchoolDeadlineCreate,
    request: Request | None = None,
) -> SchoolDeadline:
    """
    Create a manual deadline for one school, year and round.

    Raises:
        SchoolNotFoundError: school_id does not exist
        DuplicateSchoolDeadlineError: the (school, year, round) slot is taken
    """
    if not db.get(School, data.school_id):
        raise SchoolNotFoundError("School not found")

    existing = db.execute(
        select(SchoolDeadline.id).where(
            SchoolDeadline.school_id == data.school_id,
            SchoolDeadline.year == data.year,
            SchoolDeadline.round == data.round.value,
        )
    ).scalar_one_or_none()
    if existing:
        raise DuplicateSchoolDeadlineError(
            "Deadline already exists for this school, year and round"
        )

    deadline = SchoolDeadline(
        **data.model_dump(exclude={"round"}),
        round=data.round.value,
        source=DeadlineSource.MANUAL.value,
    )
    db.add(deadline)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent insert won the unique constraint
        db.rollback()
        logger.info(
            "Duplicate deadline insert for school %s/%s/%s",
            data.school_id,
            data.year,
            data.round.value,
        )
        raise DuplicateSchoolDeadlineError(
            "Deadline already exists for this school, year and round"
        )
    db.refresh(deadline)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.CREATE_SCHOOL_DEADLINE,
            resource=AuditResource.SCHOOL_DEADLINE,
            resource_id=deadline.id,
            details={
                "schoolId": str(data.school_id),
                "year": data.year,
                "round": data.round.value,
            },
        ),
        request=request,
    )
    return deadline


def update_school_deadline(
    db: Session,
    admin_id: UUID,
    deadline_id: UUID,
    data: SchoolDeadlineUpdate,
    request: Request | None = None,
) -> SchoolDeadline:
    """Apply the fields present in the payload. School, year and round never change."""
    deadline = _get_deadline_for_update(db, deadline_id)

    changed_fields = []
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(deadline, field, value)
        changed_fields.append(field)

    db.commit()
    db.refresh(deadline)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.UPDATE_SCHOOL_DEADLINE,
            resource=AuditResource.SCHOOL_DEADLINE,
            resource_id=deadline_id,
            details={"changedFields": changed_fields},
        ),
        request=request,
    )
    return deadline


def delete_school_deadline(
    db: Session,
    admin_id: UUID,
    deadline_id: UUID,
    request: Request | None = None,
) -> None:
    deadline = _get_deadline_for_update(db, deadline_id)
    details = {
        "schoolId": str(deadline.school_id),
        "year": deadline.year,
        "round": deadline.round,
    }

    db.delete(deadline)
    db.commit()

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.DELETE_SCHOOL_DEADLINE,
            resource=AuditResource.SCHOOL_DEADLINE,
            resource_id=deadline_id,
            details=details,
        ),
        request=request,
    )
