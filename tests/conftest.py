from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

# must be in place before hrportal.core.config builds its Settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "0")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import hrportal.core.tokens as tokens_module
import hrportal.models  # noqa: F401
from hrportal.core.security_password import hash_password
from hrportal.db.base import Base
from hrportal.db.session import get_db
from hrportal.main import api
from hrportal.models.company import Company
from hrportal.models.role import ROLE_ADMIN, ROLE_USER, Role
from hrportal.models.user import User

USER_PASSWORD = "correct-horse"


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(session_factory):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = _override_get_db
    yield api
    api.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def roles(db: Session) -> dict[str, Role]:
    created = {name: Role(name=name) for name in (ROLE_ADMIN, ROLE_USER)}
    db.add_all(created.values())
    db.commit()
    return created


@pytest.fixture()
def make_user(db: Session, roles) -> Callable[..., User]:
    def _make(email: str = "jane@example.com", *, name: str = "Jane Doe", admin: bool = False) -> User:
        user = User(
            name=name,
            email=email,
            hashed_password=hash_password(USER_PASSWORD),
            role_id=roles[ROLE_ADMIN if admin else ROLE_USER].id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def user(make_user) -> User:
    return make_user()


@pytest.fixture()
def admin_user(make_user) -> User:
    return make_user("admin@example.com", name="Ada Admin", admin=True)


@pytest.fixture()
def company(db: Session) -> Company:
    row = Company(name="Acme Corp")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture()
def shift_token_clock(monkeypatch: pytest.MonkeyPatch) -> Callable[[int], None]:
    """Issue tokens as if it were `seconds_ago` seconds in the past.

    Verification still uses the real clock, so tokens issued while shifted
    can be already expired.
    """

    def _shift(seconds_ago: int) -> None:
        issued_at = datetime.now(timezone.utc) - timedelta(seconds=seconds_ago)
        monkeypatch.setattr(tokens_module, "_now", lambda: issued_at)

    return _shift


def login(client: TestClient, email: str = "jane@example.com", password: str = USER_PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})
