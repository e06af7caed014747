"""Pytest configuration and fixtures."""

import os
import uuid
from collections.abc import Collection, Generator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

from src.database import Base, get_db
from src.main import app
from src.services.intervals import BusyInterval
from src.services.repository import InviteRecord


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def engine():
    """Create test database engine."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables for tests."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine, tables) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(client: TestClient) -> dict:
    """A registered user."""
    response = client.post(
        "/api/v1/register",
        json={"email": "owner@example.com", "password": "correct-horse"},
    )
    return response.json()


@pytest.fixture
def other_user(client: TestClient) -> dict:
    """A second registered user."""
    response = client.post(
        "/api/v1/register",
        json={"email": "stranger@example.com", "password": "battery-staple"},
    )
    return response.json()


@pytest.fixture
def source(client: TestClient, user: dict) -> dict:
    """An agenda source owned by ``user``."""
    response = client.post(
        "/api/v1/agenda-sources/",
        json={"user_id": user["id"], "url": "https://calendar.example.com/work.ics"},
    )
    return response.json()


class InMemoryAgendaRepository:
    """AgendaRepository holding invites, sources and busy intervals in dicts."""

    def __init__(self) -> None:
        self.invites: dict[uuid.UUID, InviteRecord] = {}
        self.owners: dict[int, int] = {}
        self.intervals: list[BusyInterval] = []
        self.interval_loads = 0

    def add_source(self, source_id: int, owner_user_id: int) -> None:
        self.owners[source_id] = owner_user_id

    def add_busy(
        self, interval_id: int, owner_user_id: int, source_id: int, start: datetime, end: datetime
    ) -> BusyInterval:
        interval = BusyInterval(interval_id, owner_user_id, source_id, start, end)
        self.intervals.append(interval)
        return interval

    def add_invite(self, **overrides) -> InviteRecord:
        fields = {
            "id": uuid.uuid4(),
            "owner_user_id": 1,
            "expires_at": utc(2030, 2, 1),
            "not_before": utc(2030, 1, 7, 9),
            "not_after": utc(2030, 1, 7, 17),
            "padding_before": timedelta(0),
            "padding_after": timedelta(0),
            "slot_sizes": (timedelta(hours=1),),
            "source_ids": (),
        }
        fields.update(overrides)
        invite = InviteRecord(**fields)
        self.invites[invite.id] = invite
        return invite

    def load_invite(self, invite_id: uuid.UUID) -> InviteRecord | None:
        return self.invites.get(invite_id)

    def source_owners(self, source_ids: Collection[int]) -> dict[int, int]:
        return {i: self.owners[i] for i in source_ids if i in self.owners}

    def load_busy_intervals(
        self, user_id: int, source_ids: Collection[int]
    ) -> list[BusyInterval]:
        self.interval_loads += 1
        return [
            i for i in self.intervals if i.owner_user_id == user_id and i.source_id in source_ids
        ]


@pytest.fixture
def memory_repository() -> InMemoryAgendaRepository:
    """An empty in-memory agenda repository."""
    return InMemoryAgendaRepository()
