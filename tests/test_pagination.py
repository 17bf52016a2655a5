"""Tests for pagination helpers."""

import pytest

from admissions_api.schemas.common import Page
from admissions_api.utils.pagination import PaginationParams, total_pages


@pytest.mark.parametrize(
    "total,page_size,expected",
    [
        (0, 20, 0),
        (1, 20, 1),
        (20, 20, 1),
        (21, 20, 2),
        (101, 50, 3),
    ],
)
def test_total_pages_is_ceiling(total, page_size, expected):
    assert total_pages(total, page_size) == expected


def test_offset():
    assert PaginationParams(page=1, page_size=20).offset == 0
    assert PaginationParams(page=3, page_size=50).offset == 100


def test_page_serializes_camel_case():
    page = Page[int].create([1, 2], total=45, pagination=PaginationParams(page=2, page_size=20))
    assert page.model_dump(by_alias=True) == {
        "data": [1, 2],
        "total": 45,
        "page": 2,
        "pageSize": 20,
        "totalPages": 3,
    }


@pytest.mark.asyncio
async def test_page_zero_rejected(admin_client):
    resp = await admin_client.get("/admin/reports", params={"page": 0})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_page_size_bounds(admin_client):
    resp = await admin_client.get("/admin/global-events", params={"pageSize": 0})
    assert resp.status_code == 422

    resp = await admin_client.get("/admin/global-events", params={"pageSize": 100})
    assert resp.status_code == 200, resp.text
    assert resp.json()["pageSize"] == 100
