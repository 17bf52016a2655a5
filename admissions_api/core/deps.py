"""FastAPI dependencies for authentication, authorization, and database access."""

from datetime import datetime, timezone
from typing import Generator
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from admissions_api.core.security import decode_session_token
from admissions_api.db.enums import Role, ROLES_CAN_ADMINISTER
from admissions_api.db.models import User
from admissions_api.db.session import SessionLocal
from admissions_api.schemas.auth import UserSession


# Cookie name for browser sessions; API clients send a Bearer token instead
COOKIE_NAME = "admissions_session"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _extract_token(request: Request) -> str | None:
    auth_header = request.headers.get("authorization", "")
    scheme, _, credentials = auth_header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(COOKIE_NAME)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Get authenticated user from the session token.

    Validates:
    - Token exists (Authorization header or session cookie)
    - JWT is valid and not expired
    - User exists and is not soft-deleted
    - User is not under an active ban
    - Token version matches (for revocation support)

    Raises:
        HTTPException 401: Authentication failed
    """
    token = _extract_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = db.get(User, _parse_subject(payload.get("sub")))
    if not user or user.deleted_at is not None:
        raise HTTPException(status_code=401, detail="User not found")

    if user.ban_active(datetime.now(timezone.utc)):
        raise HTTPException(status_code=401, detail="Account banned")

    if user.token_version != payload.get("token_version"):
        raise HTTPException(status_code=401, detail="Session revoked")

    return user


def _parse_subject(sub) -> UUID:
    try:
        return UUID(str(sub))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid session")


def get_current_session(request: Request, db: Session = Depends(get_db)) -> UserSession:
    """
    Get session context: user_id, role, email.

    The role comes from the database, not the token, so role changes
    apply immediately.

    Raises:
        HTTPException 401: Not authenticated
        HTTPException 403: Unknown role
    """
    user = get_current_user(request, db)

    # Validate role is a known enum value - return 403 not 500
    if not Role.has_value(user.role):
        raise HTTPException(
            status_code=403,
            detail=f"Unknown role '{user.role}'. Contact administrator.",
        )

    return UserSession(user_id=user.id, role=Role(user.role), email=user.email)


def require_roles(allowed_roles):
    """
    Dependency factory for role-based authorization.

    Uses enum values (not strings) to prevent drift.

    Usage:
        router = APIRouter(dependencies=[Depends(require_roles([Role.ADMIN]))])
    """
    def dependency(request: Request, db: Session = Depends(get_db)) -> UserSession:
        session = get_current_session(request, db)
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Role '{session.role.value}' not authorized for this action",
            )
        return session
    return dependency


# Shared instance so FastAPI caches it once per request
require_admin = require_roles(ROLES_CAN_ADMINISTER)
