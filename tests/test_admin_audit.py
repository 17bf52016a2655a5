"""Tests for the admin audit trail."""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from admissions_api.db.enums import AuditAction, AuditResource, ReportStatus
from admissions_api.db.models import AuditLog, Report
from admissions_api.services import audit_service, report_service
from admissions_api.services.audit_service import GENESIS_HASH


def _log(db, actor, action=AuditAction.UPDATE_USER_ROLE, resource=AuditResource.USER, **kwargs):
    return audit_service.log_admin_action(
        db,
        actor_id=actor.id,
        action=action,
        resource=resource,
        resource_id=kwargs.pop("resource_id", uuid.uuid4()),
        details=kwargs.pop("details", None),
    )


def test_hash_email_hides_address():
    hashed = audit_service.hash_email("Someone@Example.com")
    assert hashed.startswith("Som...@[hash:")
    assert "example.com" not in hashed.lower()
    assert audit_service.hash_email("someone@example.com").endswith(hashed[-14:])


def test_log_admin_action_links_hash_chain(db, admin_user):
    first = _log(db, admin_user, details={"oldRole": "USER"})
    second = _log(db, admin_user)

    assert first.prev_hash == GENESIS_HASH
    assert second.prev_hash == first.entry_hash
    assert len(second.entry_hash) == 64

    status = audit_service.verify_audit_chain(db)
    assert status.valid is True
    assert status.checked == 2


def test_verify_audit_chain_detects_tampering(db, admin_user):
    _log(db, admin_user)
    tampered = _log(db, admin_user, details={"newRole": "USER"})
    _log(db, admin_user)

    tampered.details = {"newRole": "ADMIN"}
    db.commit()

    status = audit_service.verify_audit_chain(db)
    assert status.valid is False
    assert status.broken_entry_id == tampered.id
    assert status.checked == 2


def test_audit_failure_is_swallowed_and_primary_write_kept(
    db, admin_user, regular_user, monkeypatch, caplog
):
    report = Report(
        reporter_id=regular_user.id,
        target_type="USER",
        target_id=str(uuid.uuid4()),
        reason="spam",
    )
    db.add(report)
    db.commit()

    def broken_hash(_db):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(audit_service, "get_last_audit_hash", broken_hash)

    with caplog.at_level(logging.ERROR, logger="admissions_api.services.audit_service"):
        updated = report_service.update_report_status(
            db, admin_user.id, report.id, ReportStatus.REVIEWED
        )

    assert updated.status == ReportStatus.REVIEWED.value
    db.expire_all()
    assert db.get(Report, report.id).status == ReportStatus.REVIEWED.value
    assert db.execute(select(AuditLog)).first() is None

    record = next(r for r in caplog.records if "Failed to create audit log" in r.getMessage())
    assert record.exc_info is not None
    assert record.action == AuditAction.UPDATE_REPORT_STATUS.value


def test_log_admin_action_returns_none_on_failure(db, admin_user, monkeypatch):
    def broken_commit():
        raise RuntimeError("disk full")

    monkeypatch.setattr(db, "commit", broken_commit)
    assert _log(db, admin_user) is None


@pytest.mark.asyncio
async def test_audit_log_records_request_metadata(admin_client, db, regular_user):
    resp = await admin_client.put(
        f"/admin/users/{regular_user.id}/role",
        json={"role": "VERIFIED"},
        headers={"User-Agent": "admin-console/1.0"},
    )
    assert resp.status_code == 200, resp.text

    entry = db.execute(select(AuditLog)).scalar_one()
    assert entry.user_agent == "admin-console/1.0"
    assert entry.ip_address is not None


@pytest.mark.asyncio
async def test_list_audit_logs_newest_first_with_filters(admin_client, admin_user, db, user_factory):
    other_actor = user_factory()
    _log(db, admin_user, action=AuditAction.BAN_USER)
    _log(db, other_actor, action=AuditAction.DELETE_REPORT, resource=AuditResource.REPORT)
    latest = _log(db, admin_user, action=AuditAction.UNBAN_USER, details={"wasBanned": True})

    resp = await admin_client.get("/admin/audit-logs")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 3
    assert body["pageSize"] == 50
    first = body["data"][0]
    assert first["id"] == str(latest.id)
    assert first["metadata"] == {"wasBanned": True}
    assert first["userId"] == str(admin_user.id)

    resp = await admin_client.get("/admin/audit-logs", params={"adminId": str(admin_user.id)})
    assert resp.json()["total"] == 2

    resp = await admin_client.get("/admin/audit-logs", params={"action": "DELETE_REPORT"})
    assert [e["userId"] for e in resp.json()["data"]] == [str(other_actor.id)]

    resp = await admin_client.get("/admin/audit-logs", params={"resource": "report"})
    assert resp.json()["total"] == 1


@pytest.mark.asyncio
async def test_list_audit_logs_date_range(admin_client, admin_user, db):
    old = _log(db, admin_user)
    old.created_at = datetime.now(timezone.utc) - timedelta(days=10)
    db.commit()
    recent = _log(db, admin_user)

    start = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    resp = await admin_client.get("/admin/audit-logs", params={"startDate": start})
    body = resp.json()
    assert [e["id"] for e in body["data"]] == [str(recent.id)]

    end = (datetime.now(timezone.utc) - timedelta(days=5)).isoformat()
    resp = await admin_client.get("/admin/audit-logs", params={"endDate": end})
    assert [e["id"] for e in resp.json()["data"]] == [str(old.id)]


@pytest.mark.asyncio
async def test_list_audit_logs_rejects_unknown_action(admin_client):
    resp = await admin_client.get("/admin/audit-logs", params={"action": "DROP_TABLES"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_verify_endpoint(admin_client, admin_user, db):
    _log(db, admin_user)

    resp = await admin_client.get("/admin/audit-logs/verify")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"valid": True, "checked": 1, "brokenEntryId": None}
