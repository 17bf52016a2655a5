"""Shared schema building blocks."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from admissions_api.utils.pagination import PaginationParams, total_pages

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    """Standard paginated response structure."""

    data: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def create(cls, data: list[T], total: int, pagination: PaginationParams) -> "Page[T]":
        return cls(
            data=data,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            total_pages=total_pages(total, pagination.page_size),
        )


class MessageResponse(BaseModel):
    message: str
