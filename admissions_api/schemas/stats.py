"""Admin dashboard statistics."""

from admissions_api.schemas.common import CamelModel


class AdminStats(CamelModel):
    total_users: int
    verified_users: int
    total_cases: int
    pending_reports: int
    total_reviews: int
    new_users_today: int
    new_users_this_week: int
    active_users_today: int
    banned_users: int
    total_revenue: float
    monthly_revenue: float
    pending_payments: int
    total_forum_posts: int
    total_conversations: int
    total_messages: int
    pending_verifications: int
    free_users: int
    pro_users: int
    premium_users: int
