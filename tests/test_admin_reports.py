"""Tests for report moderation endpoints."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from admissions_api.db.enums import AuditAction, ReportStatus, ReportTargetType
from admissions_api.db.models import AuditLog, Report


def make_report(db, reporter, **fields) -> Report:
    report = Report(
        id=uuid.uuid4(),
        reporter_id=reporter.id,
        target_type=fields.pop("target_type", ReportTargetType.MESSAGE.value),
        target_id=fields.pop("target_id", str(uuid.uuid4())),
        reason=fields.pop("reason", "spam"),
        **fields,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


@pytest.mark.asyncio
async def test_list_reports_includes_reporter_newest_first(admin_client, db, regular_user):
    now = datetime.now(timezone.utc)
    older = make_report(db, regular_user, created_at=now - timedelta(hours=2))
    newer = make_report(db, regular_user, created_at=now)

    resp = await admin_client.get("/admin/reports")
    assert resp.status_code == 200, resp.text

    body = resp.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["pageSize"] == 20
    assert body["totalPages"] == 1
    assert [r["id"] for r in body["data"]] == [str(newer.id), str(older.id)]
    assert body["data"][0]["reporter"] == {
        "id": str(regular_user.id),
        "email": regular_user.email,
        "role": "USER",
    }


@pytest.mark.asyncio
async def test_list_reports_filters_by_status_and_target(admin_client, db, regular_user):
    make_report(db, regular_user, status=ReportStatus.RESOLVED.value)
    make_report(db, regular_user, target_type=ReportTargetType.CASE.value)
    pending_review = make_report(db, regular_user, target_type=ReportTargetType.REVIEW.value)

    resp = await admin_client.get(
        "/admin/reports", params={"status": "PENDING", "targetType": "REVIEW"}
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 1
    assert body["data"][0]["id"] == str(pending_review.id)


@pytest.mark.asyncio
async def test_update_report_to_resolved_stamps_review_fields(
    admin_client, admin_user, db, regular_user
):
    report = make_report(db, regular_user)

    resp = await admin_client.put(
        f"/admin/reports/{report.id}",
        json={"status": "RESOLVED", "resolution": "Content removed"},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "RESOLVED"
    assert data["resolution"] == "Content removed"
    assert data["reviewedBy"] == str(admin_user.id)
    assert data["reviewedAt"] is not None
    assert data["resolvedAt"] is not None

    entry = db.execute(select(AuditLog)).scalar_one()
    assert entry.action == AuditAction.UPDATE_REPORT_STATUS.value
    assert entry.resource == "report"
    assert entry.resource_id == str(report.id)
    assert entry.user_id == admin_user.id
    assert entry.details["oldStatus"] == "PENDING"
    assert entry.details["newStatus"] == "RESOLVED"
    assert entry.details["targetType"] == "MESSAGE"


@pytest.mark.asyncio
async def test_update_report_without_resolution_keeps_existing(admin_client, db, regular_user):
    report = make_report(
        db, regular_user, status=ReportStatus.RESOLVED.value, resolution="Warned user"
    )

    # Any transition is allowed, including back to PENDING
    resp = await admin_client.put(f"/admin/reports/{report.id}", json={"status": "PENDING"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "PENDING"
    assert data["resolution"] == "Warned user"
    assert data["resolvedAt"] is None


@pytest.mark.asyncio
async def test_update_missing_report_returns_404(admin_client, db):
    resp = await admin_client.put(
        f"/admin/reports/{uuid.uuid4()}", json={"status": "REVIEWED"}
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Report not found"
    assert db.execute(select(AuditLog)).first() is None


@pytest.mark.asyncio
async def test_update_report_rejects_unknown_status(admin_client, db, regular_user):
    report = make_report(db, regular_user)
    resp = await admin_client.put(f"/admin/reports/{report.id}", json={"status": "CLOSED"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_delete_report(admin_client, db, regular_user):
    report = make_report(db, regular_user, reason="harassment")
    report_id = report.id

    resp = await admin_client.delete(f"/admin/reports/{report_id}")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"message": "Report deleted"}

    db.expire_all()
    assert db.get(Report, report_id) is None
    entry = db.execute(select(AuditLog)).scalar_one()
    assert entry.action == AuditAction.DELETE_REPORT.value
    assert entry.details["reason"] == "harassment"


@pytest.mark.asyncio
async def test_delete_missing_report_returns_404(admin_client):
    resp = await admin_client.delete(f"/admin/reports/{uuid.uuid4()}")
    assert resp.status_code == 404
