"""Admin service exceptions.

Routers translate the three base categories to HTTP status codes:
NotFoundError -> 404, ForbiddenError -> 403, ConflictError -> 409.
"""


class AdminServiceError(Exception):
    """Base exception for admin service errors."""

    pass


class NotFoundError(AdminServiceError):
    """Referenced entity does not exist."""

    pass


class ForbiddenError(AdminServiceError):
    """Action is not allowed for this actor."""

    pass


class ConflictError(AdminServiceError):
    """Action would violate a uniqueness rule."""

    pass


class ReportNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class SchoolNotFoundError(NotFoundError):
    pass


class SchoolDeadlineNotFoundError(NotFoundError):
    pass


class GlobalEventNotFoundError(NotFoundError):
    pass


class SelfActionForbiddenError(ForbiddenError):
    """Admins may not change or remove their own account."""

    pass


class DuplicateSchoolDeadlineError(ConflictError):
    """A deadline already exists for this school, year and round."""

    pass
