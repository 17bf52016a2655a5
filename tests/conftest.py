"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema rebuilt for each test
- User fixtures (admin and regular) with JWT tokens
- HTTPX AsyncClient variants: anonymous, admin and non-admin
"""
import os
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

# Must be set before the app (and its settings) are imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TESTING"] = "1"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import Session

from admissions_api.main import app
from admissions_api.db.base import Base
from admissions_api.db.session import engine, SessionLocal
from admissions_api.core.deps import get_db, COOKIE_NAME
from admissions_api.core.security import create_session_token
from admissions_api.db.models import School, User
from admissions_api.db.enums import Role


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    App code commits freely; dropping the tables afterwards gives isolation.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)


def make_user(db: Session, role: Role = Role.USER, **fields) -> User:
    user = User(
        id=uuid.uuid4(),
        email=fields.pop("email", f"user-{uuid.uuid4().hex[:8]}@test.com"),
        role=role.value,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    return make_user(db, Role.ADMIN, email=f"admin-{uuid.uuid4().hex[:8]}@test.com")


@pytest.fixture(scope="function")
def regular_user(db: Session) -> User:
    return make_user(db, Role.USER)


@pytest.fixture(scope="function")
def school(db: Session) -> School:
    school = School(id=uuid.uuid4(), name="Stanford University", name_zh="斯坦福大学")
    db.add(school)
    db.commit()
    db.refresh(school)
    return school


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = COOKIE_NAME


def auth_for(user: User) -> TestAuth:
    token = create_session_token(
        user_id=user.id,
        role=user.role,
        token_version=user.token_version,
    )
    return TestAuth(user=user, token=token)


@pytest.fixture(scope="function")
def admin_auth(admin_user: User) -> TestAuth:
    return auth_for(admin_user)


@pytest.fixture(scope="function")
def user_auth(regular_user: User) -> TestAuth:
    return auth_for(regular_user)


# =============================================================================
# Client Fixtures
# =============================================================================

def _override_db(db: Session):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated client."""
    _override_db(db)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def admin_client(
    db: Session,
    admin_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as an admin via the session cookie."""
    _override_db(db)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={admin_auth.cookie_name: admin_auth.token},
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def user_client(
    db: Session,
    user_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as a non-admin via a Bearer token."""
    _override_db(db)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {user_auth.token}"},
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def user_factory(db: Session):
    """Create extra users: user_factory(Role.VERIFIED, email=...)."""
    def factory(role: Role = Role.USER, **fields) -> User:
        return make_user(db, role, **fields)
    return factory


@pytest.fixture(scope="function")
def token_for():
    """Mint a session token for any user."""
    def mint(user: User) -> str:
        return auth_for(user).token
    return mint
