"""Report (content moderation) enums."""

from enum import Enum


class ReportTargetType(str, Enum):
    """Kinds of entities a user can report."""

    USER = "USER"
    MESSAGE = "MESSAGE"
    CASE = "CASE"
    REVIEW = "REVIEW"


class ReportStatus(str, Enum):
    """
    Report review status.

    Admins may set any status at any time; there is no enforced
    PENDING -> REVIEWED -> RESOLVED sequence.
    """

    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    RESOLVED = "RESOLVED"
