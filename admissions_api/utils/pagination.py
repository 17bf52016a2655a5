"""Pagination utilities for list endpoints."""

from dataclasses import dataclass

from fastapi import Query
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


# Pagination limits
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
CALENDAR_PAGE_SIZE = 50  # Audit logs, deadlines and events
MAX_PAGE_SIZE = 100


@dataclass
class PaginationParams:
    """Pagination parameters from query string."""
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def total_pages(total: int, page_size: int) -> int:
    """ceil(total / page_size), 0 for an empty result."""
    if page_size <= 0:
        return 0
    return (total + page_size - 1) // page_size


def pagination_dependency(default_page_size: int = DEFAULT_PAGE_SIZE):
    """
    Build a pagination dependency with an endpoint-specific default size.

    Usage:
        @router.get("/items")
        def list_items(pagination: PaginationParams = Depends(pagination_dependency())):
            ...
    """
    def dependency(
        page: int = Query(DEFAULT_PAGE, ge=1, description="Page number (1-indexed)"),
        page_size: int = Query(
            default_page_size,
            ge=1,
            le=MAX_PAGE_SIZE,
            alias="pageSize",
            description=f"Items per page (max {MAX_PAGE_SIZE})",
        ),
    ) -> PaginationParams:
        return PaginationParams(page=page, page_size=page_size)

    return dependency


get_pagination = pagination_dependency()
get_calendar_pagination = pagination_dependency(CALENDAR_PAGE_SIZE)


def paginate_select(
    db: Session,
    stmt: Select,
    pagination: PaginationParams,
    options: tuple = (),
) -> tuple[list, int]:
    """
    Apply pagination to a SQLAlchemy select.

    The statement must already carry its filters and ORDER BY. Loader
    options (joinedload etc.) are applied to the page query only.

    Returns:
        (rows, total_count)
    """
    count_stmt = select(func.count()).select_from(
        stmt.order_by(None).subquery()
    )
    total = db.execute(count_stmt).scalar_one()
    page_stmt = stmt.offset(pagination.offset).limit(pagination.page_size)
    if options:
        page_stmt = page_stmt.options(*options)
    rows = list(db.execute(page_stmt).all())
    return rows, total
