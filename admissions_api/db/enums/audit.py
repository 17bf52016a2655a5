"""Audit trail enums."""

from enum import Enum


class AuditAction(str, Enum):
    """
    Admin actions recorded in the audit trail.

    Groups:
    - *_USER*: Account management
    - *_REPORT*: Moderation
    - *_SCHOOL_DEADLINE / *_GLOBAL_EVENT: Calendar data
    """

    # Users
    UPDATE_USER_ROLE = "UPDATE_USER_ROLE"
    DELETE_USER = "DELETE_USER"
    BAN_USER = "BAN_USER"
    UNBAN_USER = "UNBAN_USER"

    # Reports
    UPDATE_REPORT_STATUS = "UPDATE_REPORT_STATUS"
    DELETE_REPORT = "DELETE_REPORT"

    # Calendar data
    CREATE_SCHOOL_DEADLINE = "CREATE_SCHOOL_DEADLINE"
    UPDATE_SCHOOL_DEADLINE = "UPDATE_SCHOOL_DEADLINE"
    DELETE_SCHOOL_DEADLINE = "DELETE_SCHOOL_DEADLINE"
    CREATE_GLOBAL_EVENT = "CREATE_GLOBAL_EVENT"
    UPDATE_GLOBAL_EVENT = "UPDATE_GLOBAL_EVENT"
    DELETE_GLOBAL_EVENT = "DELETE_GLOBAL_EVENT"


class AuditResource(str, Enum):
    """Resource names stored on audit rows."""

    USER = "user"
    REPORT = "report"
    SCHOOL_DEADLINE = "school_deadline"
    GLOBAL_EVENT = "global_event"
