"""Shared fixtures: per-test SQLite database, seeded tenants, fake clock."""

from __future__ import annotations

import os

# Settings are read at import time; configure them before importing notesapp
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"

from dataclasses import dataclass  # noqa: E402
from typing import Dict, Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from notesapp.core.context import IdentityContext  # noqa: E402
from notesapp.core.security import TokenService, get_token_service  # noqa: E402
from notesapp.database import create_db_engine, create_session_factory, get_db, init_db  # noqa: E402
from notesapp.main import app  # noqa: E402
from notesapp.models import Tenant, User  # noqa: E402
from notesapp.seed import seed_demo_data  # noqa: E402

TEST_SECRET = "unit-test-signing-secret"
START_TIME = 1_700_000_000


class FakeClock:
    """Callable clock the token service reads; tests move it forward."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class Seeded:
    """The demo tenants and users, by short name."""
    tenants: Dict[str, Tenant]
    users: Dict[str, User]

    def ctx(self, name: str) -> IdentityContext:
        user = self.users[name]
        return IdentityContext(user_id=user.id, tenant_id=user.tenant_id, role=user.role)


@pytest.fixture()
def engine(tmp_path):
    db_engine = create_db_engine(f"sqlite:///{tmp_path / 'notes-test.db'}")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    return create_session_factory(engine)


@pytest.fixture()
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded(db: Session) -> Seeded:
    tenants = seed_demo_data(db)
    users = {}
    for slug in tenants:
        for prefix in ("admin", "user"):
            email = f"{prefix}@{slug}.test"
            users[f"{slug}_{prefix}"] = db.execute(
                select(User).where(User.email == email)
            ).scalar_one()
    return Seeded(tenants=tenants, users=users)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def token_service(clock: FakeClock) -> TokenService:
    return TokenService([TEST_SECRET], clock=clock)


@pytest.fixture()
def client(session_factory, token_service) -> Iterator[TestClient]:
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(seeded: Seeded, token_service: TokenService):
    """Build an Authorization header for a seeded user, e.g. auth_headers("acme_admin")."""

    def _headers(name: str) -> Dict[str, str]:
        user = seeded.users[name]
        token = token_service.issue(
            user_id=user.id, tenant_id=user.tenant_id, role=user.role, email=user.email
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
