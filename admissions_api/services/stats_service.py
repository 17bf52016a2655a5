"""Stats service - counters for the admin dashboard."""

from datetime import datetime, time, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from admissions_api.db.enums import (
    PaymentStatus,
    ReportStatus,
    SubscriptionPlan,
    VerificationStatus,
)
from admissions_api.db.models import (
    AdmissionCase,
    Conversation,
    ForumPost,
    Message,
    Payment,
    Report,
    Review,
    User,
    VerificationRequest,
)
from admissions_api.schemas.stats import AdminStats


def _count(db: Session, model, *filters) -> int:
    stmt = select(func.count()).select_from(model)
    if filters:
        stmt = stmt.where(*filters)
    return db.execute(stmt).scalar_one()


def _revenue(db: Session, *filters) -> float:
    total = db.execute(
        select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.status == PaymentStatus.COMPLETED.value, *filters
        )
    ).scalar_one()
    return float(total or 0)


def get_stats(db: Session, now: datetime | None = None) -> AdminStats:
    """Aggregate dashboard counters. User counts skip soft-deleted accounts."""
    now = now or datetime.now(timezone.utc)
    start_of_day = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
    start_of_week = now - timedelta(days=7)
    start_of_month = start_of_day.replace(day=1)

    live = User.deleted_at.is_(None)

    return AdminStats(
        total_users=_count(db, User, live),
        verified_users=_count(db, User, live, User.email_verified.is_(True)),
        total_cases=_count(db, AdmissionCase),
        pending_reports=_count(db, Report, Report.status == ReportStatus.PENDING.value),
        total_reviews=_count(db, Review),
        new_users_today=_count(db, User, live, User.created_at >= start_of_day),
        new_users_this_week=_count(db, User, live, User.created_at >= start_of_week),
        active_users_today=_count(db, User, live, User.last_active_at >= start_of_day),
        banned_users=_count(db, User, live, User.is_banned.is_(True)),
        total_revenue=_revenue(db),
        monthly_revenue=_revenue(db, Payment.paid_at >= start_of_month),
        pending_payments=_count(
            db, Payment, Payment.status == PaymentStatus.PENDING.value
        ),
        total_forum_posts=_count(db, ForumPost),
        total_conversations=_count(db, Conversation),
        total_messages=_count(db, Message),
        pending_verifications=_count(
            db,
            VerificationRequest,
            VerificationRequest.status == VerificationStatus.PENDING.value,
        ),
        free_users=_count(
            db, User, live, User.subscription_plan == SubscriptionPlan.FREE.value
        ),
        pro_users=_count(
            db, User, live, User.subscription_plan == SubscriptionPlan.PRO.value
        ),
        premium_users=_count(
            db, User, live, User.subscription_plan == SubscriptionPlan.PREMIUM.value
        ),
    )
