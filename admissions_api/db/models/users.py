"""SQLAlchemy ORM models for user accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import Index, String, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions_api.db.base import Base
from admissions_api.db.enums import Role, SubscriptionPlan
from admissions_api.db.types import utcnow

if TYPE_CHECKING:
    from admissions_api.db.models.activity import AdmissionCase, Review


class User(Base):
    """
    Application account.

    Soft-deleted users keep their row with ``deleted_at`` set and are
    excluded from admin listings and stats.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_role_created", "role", "created_at"),
        Index("idx_users_deleted_at", "deleted_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        default=Role.USER.value,
        server_default=text("'USER'"),
        nullable=False,
    )
    email_verified: Mapped[bool] = mapped_column(
        default=False, server_default=text("false"), nullable=False
    )
    locale: Mapped[str] = mapped_column(
        String(10), default="zh", server_default=text("'zh'"), nullable=False
    )
    subscription_plan: Mapped[str] = mapped_column(
        String(20),
        default=SubscriptionPlan.FREE.value,
        server_default=text("'FREE'"),
        nullable=False,
    )

    # Moderation
    is_banned: Mapped[bool] = mapped_column(
        default=False, server_default=text("false"), nullable=False
    )
    banned_until: Mapped[datetime | None] = mapped_column(nullable=True)  # NULL = permanent
    ban_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    last_active_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Bumped to revoke all outstanding session tokens
    token_version: Mapped[int] = mapped_column(
        default=1, server_default=text("1"), nullable=False
    )

    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )

    admission_cases: Mapped[list["AdmissionCase"]] = relationship(back_populates="user")
    reviews_given: Mapped[list["Review"]] = relationship(back_populates="reviewer")

    def ban_active(self, now: datetime) -> bool:
        """True while a ban is in force (permanent bans have no end)."""
        if not self.is_banned:
            return False
        return self.banned_until is None or self.banned_until > now
