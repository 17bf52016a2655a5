"""Audit logging service - admin action trail.

Every mutating admin action appends one AuditLog row. Writes are
best-effort: a failed audit insert is rolled back and logged, and the
admin action that triggered it still succeeds.

Security guidelines:
- NEVER log secrets (API keys, tokens, passwords)
- Hash emails in details (use hash_email)
- Use IDs instead of raw data where possible
- IP: Trust X-Forwarded-For only behind a trusted proxy
"""

import hashlib
import json
import logging
import uuid
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from admissions_api.core.config import settings
from admissions_api.core.structured_logging import build_log_context
from admissions_api.db.enums import AuditAction, AuditResource
from admissions_api.db.models import AuditLog
from admissions_api.db.types import utcnow
from admissions_api.schemas.audit import AuditChainStatus, AuditLogRead
from admissions_api.schemas.common import Page
from admissions_api.utils.pagination import PaginationParams, paginate_select

logger = logging.getLogger(__name__)

GENESIS_HASH = "0" * 64


def hash_email(email: str) -> str:
    """Hash email for audit log (prefix + SHA256 suffix for debugging)."""
    if not email:
        return ""
    prefix = email.split("@")[0][:3] if "@" in email else email[:3]
    suffix = hashlib.sha256(email.lower().encode()).hexdigest()[:12]
    return f"{prefix}...@[hash:{suffix}]"


def get_client_ip(request: Request | None) -> str | None:
    """
    Extract client IP from request.

    Only trusts X-Forwarded-For when TRUST_PROXY_HEADERS=True (behind reverse proxy).
    """
    if not request:
        return None

    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            # X-Forwarded-For: client, proxy1, proxy2 - take first
            return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return None


def get_user_agent(request: Request | None) -> str | None:
    """Extract user agent from request."""
    if not request:
        return None
    ua = request.headers.get("user-agent", "")
    # Truncate to 500 chars (DB limit)
    return ua[:500] if ua else None


def canonical_json(obj: dict | None) -> str:
    """
    Serialize object to canonical JSON for consistent hashing.

    Uses sorted keys, compact separators, and str() for non-JSON types.
    """
    return json.dumps(obj or {}, sort_keys=True, separators=(",", ":"), default=str)


def compute_entry_hash(
    prev_hash: str,
    entry_id: str,
    action: str,
    resource: str,
    resource_id: str,
    actor_user_id: str,
    details_json: str,
    created_at: str,
    ip_address: str = "",
    user_agent: str = "",
) -> str:
    """SHA256 over the previous hash and every immutable column, joined with |."""
    data = "|".join([
        prev_hash,
        entry_id,
        action,
        resource,
        resource_id,
        actor_user_id,
        details_json,
        created_at,
        ip_address,
        user_agent,
    ])
    return hashlib.sha256(data.encode()).hexdigest()


def _hash_for(entry: AuditLog) -> str:
    return compute_entry_hash(
        prev_hash=entry.prev_hash or GENESIS_HASH,
        entry_id=str(entry.id),
        action=entry.action,
        resource=entry.resource,
        resource_id=entry.resource_id or "",
        actor_user_id=str(entry.user_id) if entry.user_id else "",
        details_json=canonical_json(entry.details),
        created_at=_format_timestamp(entry.created_at),
        ip_address=entry.ip_address or "",
        user_agent=entry.user_agent or "",
    )


def _format_timestamp(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def get_last_audit_hash(db: Session) -> str:
    """Hash of the most recent audit entry (created_at + id for deterministic order)."""
    # Not serialized across sessions: concurrent writers can link to the same
    # predecessor, which verify_audit_chain then reports as a break.
    result = db.execute(
        select(AuditLog.entry_hash)
        .where(AuditLog.entry_hash.isnot(None))
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(1)
    ).scalar()
    return result or GENESIS_HASH


def log_admin_action(
    db: Session,
    actor_id: UUID | None,
    action: AuditAction,
    resource: AuditResource,
    resource_id: UUID | str | None,
    details: dict[str, Any] | None = None,
    request: Request | None = None,
) -> AuditLog | None:
    """
    Append an audit entry in its own transaction.

    Must be called after the primary write is committed. Any failure is
    rolled back and logged; the caller never sees it.

    Returns:
        The committed entry, or None when the write failed
    """
    log_context = build_log_context(
        user_id=str(actor_id) if actor_id else None,
        action=action.value,
        resource=resource.value,
        resource_id=str(resource_id) if resource_id else None,
        route=request.url.path if request else None,
        method=request.method if request else None,
    )
    try:
        # Round-trip so the stored JSON and the hashed JSON are identical
        safe_details = json.loads(canonical_json(details)) if details is not None else None
        entry = AuditLog(
            id=uuid.uuid4(),
            user_id=actor_id,
            action=action.value,
            resource=resource.value,
            resource_id=str(resource_id) if resource_id else None,
            details=safe_details,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
            prev_hash=get_last_audit_hash(db),
            created_at=utcnow(),
        )
        entry.entry_hash = _hash_for(entry)
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(
            "Failed to create audit log: %s", action.value, exc_info=True, extra=log_context
        )
        return None

    logger.info(
        "Audit: %s on %s/%s by admin %s",
        action.value,
        resource.value,
        resource_id,
        actor_id,
        extra=log_context,
    )
    return entry


def list_audit_logs(
    db: Session,
    pagination: PaginationParams,
    actor_id: UUID | None = None,
    action: str | None = None,
    resource: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> Page[AuditLogRead]:
    """List audit entries newest first, filtered by actor, action, resource and date range."""
    stmt = select(AuditLog)
    if actor_id:
        stmt = stmt.where(AuditLog.user_id == actor_id)
    if action:
        stmt = stmt.where(AuditLog.action == action)
    if resource:
        stmt = stmt.where(AuditLog.resource == resource)
    if start_date:
        stmt = stmt.where(AuditLog.created_at >= start_date)
    if end_date:
        stmt = stmt.where(AuditLog.created_at <= end_date)
    stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())

    rows, total = paginate_select(db, stmt, pagination)
    items = [
        AuditLogRead(
            id=log.id,
            user_id=log.user_id,
            action=log.action,
            resource=log.resource,
            resource_id=log.resource_id,
            metadata=log.details,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            created_at=log.created_at,
        )
        for (log,) in rows
    ]
    return Page[AuditLogRead].create(items, total, pagination)


def verify_audit_chain(db: Session) -> AuditChainStatus:
    """
    Walk the hash chain oldest-first.

    Reports the first entry whose prev_hash link or own hash does not match.
    """
    expected_prev = GENESIS_HASH
    checked = 0
    entries = db.execute(
        select(AuditLog)
        .where(AuditLog.entry_hash.isnot(None))
        .order_by(AuditLog.created_at.asc(), AuditLog.id.asc())
    ).scalars()
    for entry in entries:
        checked += 1
        if entry.prev_hash != expected_prev or _hash_for(entry) != entry.entry_hash:
            logger.warning("Audit chain broken at entry %s", entry.id)
            return AuditChainStatus(valid=False, checked=checked, broken_entry_id=entry.id)
        expected_prev = entry.entry_hash
    return AuditChainStatus(valid=True, checked=checked)
