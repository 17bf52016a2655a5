"""Global event service - tests, competitions and other dated events shared by all users."""

from uuid import UUID

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from admissions_api.db.enums import AuditAction, AuditResource, GlobalEventCategory
from admissions_api.db.models import GlobalEvent
from admissions_api.schemas.common import Page
from admissions_api.schemas.global_event import (
    GlobalEventCreate,
    GlobalEventRead,
    GlobalEventUpdate,
)
from admissions_api.services.admin_events import AdminActionEvent, emit_admin_action
from admissions_api.services.errors import GlobalEventNotFoundError
from admissions_api.utils.pagination import PaginationParams, paginate_select

NON_NULLABLE_FIELDS = {
    "title",
    "category",
    "event_date",
    "year",
    "is_recurring",
    "is_active",
}


def list_global_events(
    db: Session,
    pagination: PaginationParams,
    category: GlobalEventCategory | None = None,
    year: int | None = None,
) -> Page[GlobalEventRead]:
    stmt = select(GlobalEvent)
    if category:
        stmt = stmt.where(GlobalEvent.category == category.value)
    if year:
        stmt = stmt.where(GlobalEvent.year == year)
    stmt = stmt.order_by(GlobalEvent.event_date.asc(), GlobalEvent.id.asc())

    rows, total = paginate_select(db, stmt, pagination)
    items = [GlobalEventRead.model_validate(event) for (event,) in rows]
    return Page[GlobalEventRead].create(items, total, pagination)


def _get_event_for_update(db: Session, event_id: UUID) -> GlobalEvent:
    event = db.execute(
        select(GlobalEvent).where(GlobalEvent.id == event_id).with_for_update()
    ).scalar_one_or_none()
    if not event:
        raise GlobalEventNotFoundError("Event not found")
    return event


def create_global_event(
    db: Session,
    admin_id: UUID,
    data: GlobalEventCreate,
    request: Request | None = None,
) -> GlobalEvent:
    event = GlobalEvent(
        **data.model_dump(exclude={"category"}),
        category=data.category.value,
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.CREATE_GLOBAL_EVENT,
            resource=AuditResource.GLOBAL_EVENT,
            resource_id=event.id,
            details={
                "title": event.title,
                "category": event.category,
                "year": event.year,
            },
        ),
        request=request,
    )
    return event


def update_global_event(
    db: Session,
    admin_id: UUID,
    event_id: UUID,
    data: GlobalEventUpdate,
    request: Request | None = None,
) -> GlobalEvent:
    """Partial update; explicit nulls are ignored for required columns."""
    event = _get_event_for_update(db, event_id)

    changed_fields = []
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        if isinstance(value, GlobalEventCategory):
            value = value.value
        setattr(event, field, value)
        changed_fields.append(field)

    db.commit()
    db.refresh(event)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.UPDATE_GLOBAL_EVENT,
            resource=AuditResource.GLOBAL_EVENT,
            resource_id=event_id,
            details={"changedFields": changed_fields},
        ),
        request=request,
    )
    return event


def delete_global_event(
    db: Session,
    admin_id: UUID,
    event_id: UUID,
    request: Request | None = None,
) -> None:
    event = _get_event_for_update(db, event_id)
    details = {"title": event.title, "category": event.category, "year": event.year}

    db.delete(event)
    db.commit()

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.DELETE_GLOBAL_EVENT,
            resource=AuditResource.GLOBAL_EVENT,
            resource_id=event_id,
            details=details,
        ),
        request=request,
    )
