"""Tests for admin route authentication and authorization."""

import uuid

import jwt
import pytest

from admissions_api.core.config import settings
from admissions_api.db.enums import Role


ADMIN_ROUTES = [
    ("GET", "/admin/stats"),
    ("GET", "/admin/reports"),
    ("GET", "/admin/users"),
    ("GET", "/admin/audit-logs"),
    ("GET", "/admin/audit-logs/verify"),
    ("GET", "/admin/school-deadlines"),
    ("GET", "/admin/global-events"),
    ("DELETE", f"/admin/users/{uuid.uuid4()}"),
    ("POST", f"/admin/users/{uuid.uuid4()}/unban"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
async def test_admin_routes_require_authentication(client, method, path):
    resp = await client.request(method, path)
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
async def test_admin_routes_reject_non_admins(user_client, method, path):
    resp = await user_client.request(method, path)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_verified_user_is_not_admin(client, user_factory, token_for):
    verified = user_factory(Role.VERIFIED)
    resp = await client.get(
        "/admin/stats", headers={"Authorization": f"Bearer {token_for(verified)}"}
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_bearer_token_accepted(client, admin_auth):
    resp = await client.get(
        "/admin/stats", headers={"Authorization": f"Bearer {admin_auth.token}"}
    )
    assert resp.status_code == 200, resp.text


@pytest.mark.asyncio
async def test_garbage_token_rejected(client):
    resp = await client.get("/admin/stats", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_rejected(client, admin_user):
    token = jwt.encode(
        {"sub": str(admin_user.id), "role": "ADMIN", "token_version": 1},
        "some-other-secret",
        algorithm="HS256",
    )
    resp = await client.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_token_with_non_uuid_subject_rejected(client):
    token = jwt.encode(
        {"sub": "42", "role": "ADMIN", "token_version": 1},
        settings.JWT_SECRET,
        algorithm="HS256",
    )
    resp = await client.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_stale_token_version_rejected(client, db, admin_user, admin_auth):
    admin_user.token_version += 1
    db.commit()

    resp = await client.get(
        "/admin/stats", headers={"Authorization": f"Bearer {admin_auth.token}"}
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Session revoked"


@pytest.mark.asyncio
async def test_previous_secret_still_accepted_during_rotation(client, admin_user, monkeypatch):
    token = jwt.encode(
        {"sub": str(admin_user.id), "role": "ADMIN", "token_version": admin_user.token_version},
        "retired-secret",
        algorithm="HS256",
    )
    monkeypatch.setattr(settings, "JWT_SECRET_PREVIOUS", "retired-secret")

    resp = await client.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200, resp.text
