"""SQLAlchemy ORM model for user-submitted reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions_api.db.base import Base
from admissions_api.db.enums import ReportStatus
from admissions_api.db.types import JSONType, utcnow

if TYPE_CHECKING:
    from admissions_api.db.models.users import User


class Report(Base):
    """
    A flag raised by a user against another user, message, case or review.

    Created by reporting users; only admins change status/resolution or
    delete it.
    """

    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_reports_status_created", "status", "created_at"),
        Index("idx_reports_target", "target_type", "target_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    reporter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_type: Mapped[str] = mapped_column(String(20), nullable=False)  # ReportTargetType
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)
    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    context: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        default=ReportStatus.PENDING.value,
        server_default=text("'PENDING'"),
        nullable=False,
    )
    resolution: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )

    reporter: Mapped["User"] = relationship(foreign_keys=[reporter_id])
    reviewer: Mapped["User | None"] = relationship(foreign_keys=[reviewed_by])
