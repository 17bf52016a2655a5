"""Authentication-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel

from admissions_api.db.enums import Role


class UserSession(BaseModel):
    """
    Session context for authenticated requests.

    Returned by the get_current_session dependency.
    """
    user_id: UUID
    role: Role  # Validated enum
    email: str
