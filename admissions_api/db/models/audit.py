"""SQLAlchemy ORM model for the admin audit trail."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions_api.db.base import Base
from admissions_api.db.types import JSONType, utcnow

if TYPE_CHECKING:
    from admissions_api.db.models.users import User


class AuditLog(Base):
    """
    Append-only record of admin actions.

    Each row stores who did what to which resource, with before/after
    values in ``details``. Rows are never updated or deleted through the API.

    Security:
    - Never stores secrets/tokens
    - Hash chain (prev_hash -> entry_hash) makes tampering detectable
    """

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("idx_audit_created", "created_at"),
        Index("idx_audit_actor_created", "user_id", "created_at"),
        Index("idx_audit_action_created", "action", "created_at"),
        Index("idx_audit_resource", "resource", "resource_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,  # System events have no actor
    )

    action: Mapped[str] = mapped_column(String(50), nullable=False)  # AuditAction
    resource: Mapped[str] = mapped_column(String(50), nullable=False)  # AuditResource
    resource_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # "metadata" is reserved on declarative classes
    details: Mapped[dict | None] = mapped_column("metadata", JSONType, nullable=True)

    # Request metadata
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)  # IPv6 max length
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Tamper-evident hash chain
    prev_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)  # SHA256 hex
    entry_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)  # SHA256 hex

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )

    actor: Mapped["User | None"] = relationship()
