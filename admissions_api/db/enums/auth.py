"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    User roles with increasing privilege levels.

    - USER: Regular account
    - VERIFIED: Account with a verified admission record
    - ADMIN: Operator with access to the admin console
    """

    USER = "USER"
    VERIFIED = "VERIFIED"
    ADMIN = "ADMIN"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class SubscriptionPlan(str, Enum):
    FREE = "FREE"
    PRO = "PRO"
    PREMIUM = "PREMIUM"
