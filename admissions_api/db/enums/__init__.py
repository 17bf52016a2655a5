"""Enum definitions for application constants."""

from admissions_api.db.enums.audit import AuditAction, AuditResource
from admissions_api.db.enums.auth import Role, SubscriptionPlan
from admissions_api.db.enums.billing import PaymentStatus, VerificationStatus
from admissions_api.db.enums.calendar import (
    AdmissionRound,
    DeadlineSource,
    GlobalEventCategory,
)
from admissions_api.db.enums.moderation import ReportStatus, ReportTargetType

# Roles allowed into the admin console
ROLES_CAN_ADMINISTER = {Role.ADMIN}

__all__ = [
    "AdmissionRound",
    "AuditAction",
    "AuditResource",
    "DeadlineSource",
    "GlobalEventCategory",
    "PaymentStatus",
    "ROLES_CAN_ADMINISTER",
    "ReportStatus",
    "ReportTargetType",
    "Role",
    "SubscriptionPlan",
    "VerificationStatus",
]
