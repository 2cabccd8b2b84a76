"""Shared test fixtures: in-memory SQLite store, repository graph, API client.

Invariants:
    - Every test gets a fresh in-memory database (StaticPool: one shared connection)
    - Foreign keys are enforced on that connection, as in build_engine()
    - Repositories are wired exactly as devicehub.dependencies wires them
    - The API client shares the test Session and a fast argon2 CredentialService
"""

import os

# Settings are read at import time of devicehub.main
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

from types import SimpleNamespace

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from devicehub.core.security import CredentialService, get_credential_service
from devicehub.database import create_db_and_tables, enable_sqlite_foreign_keys, get_session
from devicehub.main import app
from devicehub.repositories.assignment_repo import AssignmentRepository
from devicehub.repositories.device_repo import DeviceRepository
from devicehub.repositories.role_repo import RoleRepository
from devicehub.repositories.subscriber_repo import SubscriberRepository
from devicehub.repositories.user_repo import UserRepository


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def credentials():
    # Minimal argon2 cost keeps the suite fast
    hasher = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)
    return CredentialService("test-secret", expires_in=3600, hasher=hasher)


def build_repos(session, credentials) -> SimpleNamespace:
    roles = RoleRepository(session)
    subscribers = SubscriberRepository(session)
    users = UserRepository(session, subscribers, roles, credentials)
    devices = DeviceRepository(session, subscribers)
    assignments = AssignmentRepository(session, users, devices)
    return SimpleNamespace(
        roles=roles,
        subscribers=subscribers,
        users=users,
        devices=devices,
        assignments=assignments,
    )


@pytest.fixture
def repos(session, credentials):
    return build_repos(session, credentials)


@pytest.fixture
def subscriber(repos):
    return repos.subscribers.create(
        {"name": "DevSub", "address": "Addr", "phone_number": "8001"}
    )


@pytest.fixture
def role(repos):
    return repos.roles.create({"role_name": "operator"})


@pytest.fixture
def user(repos, subscriber, role):
    return repos.users.create(
        {
            "subscriber_id": subscriber.id,
            "role_id": role.id,
            "email": "alice@example.com",
            "username": "alice",
            "password": "s3cret",
        }
    )


@pytest.fixture
def device(repos, subscriber):
    return repos.devices.create(
        {"subscriber_id": subscriber.id, "mac_id": "mac-001", "model_name": "M1"}
    )


@pytest.fixture
def client(session, credentials):
    """FastAPI test client with session and credential service overridden."""

    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_credential_service] = lambda: credentials
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(credentials):
    token = credentials.issue_token({"id": 1, "username": "tester"})
    return {"Authorization": f"Bearer {token.token}"}
