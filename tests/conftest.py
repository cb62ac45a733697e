"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from tests.test_constants import ALICE_ID, BOB_ID, CAROL_ID, TEST_APP_URL, TEST_SECRET_KEY

# Force an in-memory database when pytest runs; don't inherit from .env
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SECRET_KEY"] = TEST_SECRET_KEY
os.environ["APP_URL"] = TEST_APP_URL
os.environ.pop("IDENTITY_TOKEN_AUDIENCE", None)


@pytest.fixture
def db() -> Session:
    """Fresh in-memory database per test with all tables created."""
    from notespace.db.session import Base
    import notespace.models  # noqa: F401

    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = Session(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client (no DB override)."""
    from notespace.main import app

    return TestClient(app)


@pytest.fixture
def api_client(db: Session):
    """TestClient with get_db overridden to use the test db session."""
    from notespace.db.session import get_db
    from notespace.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    c = TestClient(app)
    yield c
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def auth_headers():
    """Build an Authorization header carrying an identity token for a user id."""
    from notespace.services.identity import create_identity_token

    def _headers(user_id: str, email: str | None = None, name: str | None = None) -> dict:
        token = create_identity_token(user_id, email=email, name=name)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def users(db: Session) -> dict[str, str]:
    """Synced profiles for alice, bob and carol."""
    from notespace.services.identity import sync_user

    sync_user(db, ALICE_ID, email="alice@example.com", name="Alice")
    sync_user(db, BOB_ID, email="bob@example.com", name="Bob")
    sync_user(db, CAROL_ID, email="carol@example.com", name=None)
    return {"alice": ALICE_ID, "bob": BOB_ID, "carol": CAROL_ID}


@pytest.fixture
def workspace(db: Session, users: dict[str, str]):
    """Workspace "Team Notes" created by alice (sole admin)."""
    from notespace.services.workspace_registry import create_workspace

    return create_workspace(db, "Team Notes", "Shared drafts", users["alice"])


@pytest.fixture
def add_member(db: Session):
    """Insert a membership row directly with the given role."""
    from notespace.models import WorkspaceMember

    def _add(workspace_id: str, user_id: str, role: str, invited_by: str = ALICE_ID):
        member = WorkspaceMember(
            workspace_id=workspace_id,
            user_id=user_id,
            role=role,
            invited_by=invited_by,
        )
        db.add(member)
        db.commit()
        return member

    return _add
