"""Shared test fixtures."""

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sect_economy.core.event_bus import EventBus
from sect_economy.core.notifications import NotificationLog
from sect_economy.core.scheduler import VirtualScheduler
from sect_economy.core.state import InMemoryPlayerStateStore, PlayerState
from sect_economy.db.database import get_db
from sect_economy.db.models import Base
from sect_economy.db.state_store import SqlPlayerStateStore
from sect_economy.main import app, init_services

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


# ── core fixtures ──


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def notifications(bus: EventBus) -> NotificationLog:
    return NotificationLog(bus)


@pytest.fixture()
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture()
def store() -> InMemoryPlayerStateStore:
    """In-memory store holding one player with a created character."""
    store = InMemoryPlayerStateStore()
    store.create(
        PlayerState(
            player_id="p1",
            gold=1000,
            spiritual_stones=10,
            energy=100,
            cultivation_level=1,
            character_created=True,
        )
    )
    return store


# ── DB fixtures ──


@pytest.fixture()
def session_factory() -> sessionmaker[Session]:
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


# ── API fixtures ──


@pytest.fixture()
def client(scheduler: VirtualScheduler) -> TestClient:
    """FastAPI TestClient wired to in-memory SQLite and a virtual clock."""
    Base.metadata.drop_all(bind=TEST_ENGINE)
    Base.metadata.create_all(bind=TEST_ENGINE)
    init_services(
        app,
        SqlPlayerStateStore(TestSession),
        scheduler,
        rng=random.Random(42),
    )
    yield TestClient(app)
    app.state.quest_sessions.close_all()
