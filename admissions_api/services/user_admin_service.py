"""User management for the admin console.

Role changes, soft deletes and bans. An admin can never target their own
account; that guard runs before any database access.
"""

from datetime import timedelta
from uuid import UUID

from fastapi import Request
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from admissions_api.db.enums import AuditAction, AuditResource, Role
from admissions_api.db.models import AdmissionCase, Review, User
from admissions_api.db.types import utcnow
from admissions_api.schemas.common import Page
from admissions_api.schemas.user import DEFAULT_BAN_HOURS, AdminUserRead, UserCounts
from admissions_api.services.admin_events import AdminActionEvent, emit_admin_action
from admissions_api.services.audit_service import hash_email
from admissions_api.services.errors import SelfActionForbiddenError, UserNotFoundError
from admissions_api.utils.normalization import escape_like_string, normalize_search_text
from admissions_api.utils.pagination import PaginationParams, paginate_select


def _ensure_not_self(actor_id: UUID, target_id: UUID, message: str) -> None:
    if actor_id == target_id:
        raise SelfActionForbiddenError(message)


def _get_active_user_for_update(db: Session, user_id: UUID) -> User:
    user = db.execute(
        select(User)
        .where(User.id == user_id, User.deleted_at.is_(None))
        .with_for_update()
    ).scalar_one_or_none()
    if not user:
        raise UserNotFoundError("User not found")
    return user


def list_users(
    db: Session,
    pagination: PaginationParams,
    search: str | None = None,
    role: Role | None = None,
) -> Page[AdminUserRead]:
    """
    List non-deleted users newest first.

    search is a case-insensitive substring match on email. Each row carries
    its admission case and review counts.
    """
    case_count = (
        select(func.count(AdmissionCase.id))
        .where(AdmissionCase.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    review_count = (
        select(func.count(Review.id))
        .where(Review.reviewer_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )

    stmt = select(User, case_count, review_count).where(User.deleted_at.is_(None))
    normalized = normalize_search_text(search)
    if normalized:
        stmt = stmt.where(
            User.email.ilike(f"%{escape_like_string(normalized)}%", escape="\\")
        )
    if role:
        stmt = stmt.where(User.role == role.value)
    stmt = stmt.order_by(User.created_at.desc(), User.id.desc())

    rows, total = paginate_select(db, stmt, pagination)
    items = []
    for user, cases, reviews in rows:
        item = AdminUserRead.model_validate(user)
        item.counts = UserCounts(admission_cases=cases or 0, reviews_given=reviews or 0)
        items.append(item)
    return Page[AdminUserRead].create(items, total, pagination)


def update_user_role(
    db: Session,
    admin_id: UUID,
    user_id: UUID,
    role: Role,
    request: Request | None = None,
) -> User:
    """Change a user's role. Takes effect on their next request."""
    _ensure_not_self(admin_id, user_id, "Cannot change your own role")

    user = _get_active_user_for_update(db, user_id)
    old_role = user.role
    user.role = role.value
    db.commit()
    db.refresh(user)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.UPDATE_USER_ROLE,
            resource=AuditResource.USER,
            resource_id=user_id,
            details={
                "email": hash_email(user.email),
                "oldRole": old_role,
                "newRole": role.value,
            },
        ),
        request=request,
    )
    return user


def delete_user(
    db: Session,
    admin_id: UUID,
    user_id: UUID,
    request: Request | None = None,
) -> None:
    """Soft-delete a user and revoke their sessions."""
    _ensure_not_self(admin_id, user_id, "Cannot delete your own account")

    user = _get_active_user_for_update(db, user_id)
    details = {"email": hash_email(user.email), "role": user.role}
    user.deleted_at = utcnow()
    user.token_version += 1
    db.commit()

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.DELETE_USER,
            resource=AuditResource.USER,
            resource_id=user_id,
            details=details,
        ),
        request=request,
    )


def ban_user(
    db: Session,
    admin_id: UUID,
    user_id: UUID,
    reason: str,
    duration_hours: int | None = None,
    permanent: bool = False,
    request: Request | None = None,
) -> User:
    """
    Ban a user, either for duration_hours or permanently.

    Re-banning an already banned user replaces the previous ban.
    """
    _ensure_not_self(admin_id, user_id, "Cannot ban yourself")

    user = _get_active_user_for_update(db, user_id)
    user.is_banned = True
    user.ban_reason = reason
    hours = duration_hours or DEFAULT_BAN_HOURS
    user.banned_until = None if permanent else utcnow() + timedelta(hours=hours)
    user.token_version += 1
    db.commit()
    db.refresh(user)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.BAN_USER,
            resource=AuditResource.USER,
            resource_id=user_id,
            details={
                "reason": reason,
                "permanent": permanent,
                "bannedUntil": user.banned_until.isoformat() if user.banned_until else None,
            },
        ),
        request=request,
    )
    return user


def unban_user(
    db: Session,
    admin_id: UUID,
    user_id: UUID,
    request: Request | None = None,
) -> User:
    """Lift a ban. Unbanning a user who is not banned is a no-op write."""
    _ensure_not_self(admin_id, user_id, "Cannot unban yourself")

    user = _get_active_user_for_update(db, user_id)
    was_banned = user.is_banned
    user.is_banned = False
    user.banned_until = None
    user.ban_reason = None
    db.commit()
    db.refresh(user)

    emit_admin_action(
        db,
        AdminActionEvent(
            actor_id=admin_id,
            action=AuditAction.UNBAN_USER,
            resource=AuditResource.USER,
            resource_id=user_id,
            details={"wasBanned": was_banned},
        ),
        request=request,
    )
    return user
