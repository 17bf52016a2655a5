"""Tests for global calendar event administration."""

import uuid
from datetime import date

import pytest
from sqlalchemy import select

from admissions_api.db.enums import AuditAction, GlobalEventCategory
from admissions_api.db.models import AuditLog, GlobalEvent


def make_event(db, **fields) -> GlobalEvent:
    event = GlobalEvent(
        title=fields.pop("title", "SAT"),
        category=fields.pop("category", GlobalEventCategory.TEST.value),
        event_date=fields.pop("event_date", date(2026, 3, 14)),
        year=fields.pop("year", 2026),
        **fields,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@pytest.mark.asyncio
async def test_create_global_event_defaults_recurring(admin_client, admin_user, db):
    resp = await admin_client.post(
        "/admin/global-events",
        json={
            "title": "AP Exams",
            "titleZh": "AP考试",
            "category": "TEST",
            "eventDate": "2026-05-04",
            "registrationDeadline": "2025-11-14",
            "year": 2026,
        },
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["isRecurring"] is True
    assert data["isActive"] is True
    assert data["category"] == "TEST"
    assert data["registrationDeadline"] == "2025-11-14"

    entry = db.execute(select(AuditLog)).scalar_one()
    assert entry.action == AuditAction.CREATE_GLOBAL_EVENT.value
    assert entry.resource == "global_event"
    assert entry.resource_id == data["id"]
    assert entry.user_id == admin_user.id


@pytest.mark.asyncio
async def test_create_global_event_validates_payload(admin_client):
    resp = await admin_client.post(
        "/admin/global-events",
        json={"title": "", "category": "PARTY", "eventDate": "2026-05-04", "year": 2026},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_global_events_sorted_by_date_and_filtered(admin_client, db):
    make_event(db, title="ACT", event_date=date(2026, 4, 11))
    make_event(db, title="SAT", event_date=date(2026, 3, 14))
    make_event(
        db,
        title="USAMO",
        category=GlobalEventCategory.COMPETITION.value,
        event_date=date(2026, 3, 20),
    )
    make_event(db, title="SAT 2025", event_date=date(2025, 3, 8), year=2025)

    resp = await admin_client.get(
        "/admin/global-events", params={"category": "TEST", "year": 2026}
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert [e["title"] for e in body["data"]] == ["SAT", "ACT"]
    assert body["pageSize"] == 50

    resp = await admin_client.get("/admin/global-events")
    assert [e["title"] for e in resp.json()["data"]] == ["SAT 2025", "SAT", "USAMO", "ACT"]


@pytest.mark.asyncio
async def test_update_global_event_partial(admin_client, db):
    event = make_event(db, url="https://example.com/sat")

    resp = await admin_client.put(
        f"/admin/global-events/{event.id}",
        json={"isActive": False, "category": "OTHER", "title": None, "url": None},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["isActive"] is False
    assert data["category"] == "OTHER"
    assert data["title"] == "SAT"
    assert data["url"] is None

    db.refresh(event)
    assert event.category == "OTHER"

    entry = db.execute(select(AuditLog)).scalar_one()
    assert entry.action == AuditAction.UPDATE_GLOBAL_EVENT.value
    assert sorted(entry.details["changedFields"]) == ["category", "is_active", "url"]


@pytest.mark.asyncio
async def test_update_missing_event_returns_404(admin_client, db):
    resp = await admin_client.put(
        f"/admin/global-events/{uuid.uuid4()}", json={"title": "New"}
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Event not found"
    assert db.execute(select(AuditLog)).first() is None


@pytest.mark.asyncio
async def test_delete_global_event(admin_client, db):
    event = make_event(db)
    event_id = event.id

    resp = await admin_client.delete(f"/admin/global-events/{event_id}")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"message": "Event deleted"}

    db.expire_all()
    assert db.get(GlobalEvent, event_id) is None
    entry = db.execute(select(AuditLog)).scalar_one()
    assert entry.action == AuditAction.DELETE_GLOBAL_EVENT.value
    assert entry.details["title"] == "SAT"

    resp = await admin_client.delete(f"/admin/global-events/{event_id}")
    assert resp.status_code == 404
    assert len(db.execute(select(AuditLog)).scalars().all()) == 1
