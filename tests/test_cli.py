"""Tests for admin CLI commands."""

from click.testing import CliRunner

from admissions_api.cli import cli
from admissions_api.core.security import decode_session_token
from admissions_api.db.enums import AuditAction, AuditResource, Role
from admissions_api.services import audit_service


def test_promote_admin(db, regular_user):
    result = CliRunner().invoke(cli, ["promote-admin", "--email", regular_user.email.upper()])
    assert result.exit_code == 0, result.output
    assert "Promoted" in result.output

    db.refresh(regular_user)
    assert regular_user.role == Role.ADMIN.value


def test_promote_admin_unknown_email(db):
    result = CliRunner().invoke(cli, ["promote-admin", "--email", "nobody@test.com"])
    assert result.exit_code == 0
    assert "No active user" in result.output


def test_issue_token(db, admin_user):
    result = CliRunner().invoke(cli, ["issue-token", "--email", admin_user.email])
    assert result.exit_code == 0, result.output

    payload = decode_session_token(result.output.strip())
    assert payload["sub"] == str(admin_user.id)
    assert payload["token_version"] == admin_user.token_version


def test_verify_audit_chain_command(db, admin_user):
    audit_service.log_admin_action(
        db,
        actor_id=admin_user.id,
        action=AuditAction.DELETE_REPORT,
        resource=AuditResource.REPORT,
        resource_id="r-1",
    )

    result = CliRunner().invoke(cli, ["verify-audit-chain"])
    assert result.exit_code == 0, result.output
    assert "1 entries" in result.output
