"""SQLAlchemy ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from admissions_api.db.models.activity import (
    AdmissionCase,
    Conversation,
    ForumPost,
    Message,
    Review,
    VerificationRequest,
)
from admissions_api.db.models.audit import AuditLog
from admissions_api.db.models.billing import Payment
from admissions_api.db.models.events import GlobalEvent
from admissions_api.db.models.moderation import Report
from admissions_api.db.models.schools import School, SchoolDeadline
from admissions_api.db.models.users import User

__all__ = [
    "AdmissionCase",
    "AuditLog",
    "Conversation",
    "ForumPost",
    "GlobalEvent",
    "Message",
    "Payment",
    "Report",
    "Review",
    "School",
    "SchoolDeadline",
    "User",
    "VerificationRequest",
]
