"""CLI tools for admin console operations."""

import click
from sqlalchemy import func, select

from admissions_api.core.security import create_session_token
from admissions_api.db.enums import Role
from admissions_api.db.models import User
from admissions_api.db.session import SessionLocal
from admissions_api.services import audit_service


@click.group()
def cli():
    """Admissions admin CLI tools."""
    pass


def _find_user(db, email: str) -> User | None:
    return db.execute(
        select(User).where(
            func.lower(User.email) == email.lower().strip(),
            User.deleted_at.is_(None),
        )
    ).scalar_one_or_none()


@cli.command()
@click.option("--email", required=True, help="Email of an existing account")
def promote_admin(email: str):
    """
    Grant the ADMIN role to an existing user.

    This is the bootstrap command for the first admin; later role changes
    go through the admin API so they are audited.

    Example:
        python -m admissions_api.cli promote-admin --email "ops@example.com"
    """
    db = SessionLocal()
    try:
        user = _find_user(db, email)
        if not user:
            click.echo(f"❌ No active user with email {email}")
            return
        if user.role == Role.ADMIN.value:
            click.echo(f"✓ {email} is already an admin")
            return

        user.role = Role.ADMIN.value
        db.commit()
        click.echo(f"✓ Promoted {email} to admin")
        click.echo(f"  ID: {user.id}")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="Email of an existing account")
def issue_token(email: str):
    """Print a session token for a user (for API clients and scripts)."""
    db = SessionLocal()
    try:
        user = _find_user(db, email)
        if not user:
            click.echo(f"❌ No active user with email {email}")
            return
        click.echo(create_session_token(user.id, user.role, user.token_version))
    finally:
        db.close()


@cli.command()
def verify_audit_chain():
    """Check the audit log hash chain end to end."""
    db = SessionLocal()
    try:
        result = audit_service.verify_audit_chain(db)
        if result.valid:
            click.echo(f"✓ Audit chain intact ({result.checked} entries)")
        else:
            click.echo(
                f"❌ Audit chain broken at entry {result.broken_entry_id} "
                f"(after {result.checked} entries)"
            )
            raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    cli()
