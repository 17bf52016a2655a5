"""Admin user-management schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from admissions_api.db.enums import Role, SubscriptionPlan
from admissions_api.schemas.common import CamelModel

DEFAULT_BAN_HOURS = 24


class UserCounts(CamelModel):
    admission_cases: int = 0
    reviews_given: int = 0


class AdminUserRead(CamelModel):
    """User row as seen in the admin console."""
    id: UUID
    email: str
    role: Role
    email_verified: bool
    locale: str
    subscription_plan: SubscriptionPlan
    is_banned: bool
    banned_until: datetime | None = None
    ban_reason: str | None = None
    created_at: datetime
    updated_at: datetime
    counts: UserCounts = Field(default_factory=UserCounts, alias="_count")


class UserRoleUpdate(CamelModel):
    role: Role


class UserRoleResult(CamelModel):
    id: UUID
    email: str
    role: Role
    email_verified: bool


class UserBanRequest(CamelModel):
    reason: str = Field(..., min_length=1, max_length=500)
    duration_hours: int | None = Field(None, ge=1, le=24 * 365)
    permanent: bool = False


class UserBanResult(CamelModel):
    id: UUID
    email: str
    is_banned: bool
    banned_until: datetime | None = None
    ban_reason: str | None = None
