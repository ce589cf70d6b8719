import os

# Keep the module level app (events_api.main.app) off the disk.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm.session import Session

from events_api.core.config import Settings
from events_api.main import create_app
from events_api.models.events import Event
from events_api.models.registrations import Registration
from events_api.models.users import User


@pytest.fixture
def app() -> FastAPI:
    """A fresh app with its own in-memory SQLite database."""
    return create_app(Settings(database_url="sqlite://", cors_origins=["*"]))


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app: FastAPI):
    db: Session = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def make_event(db_session: Session, now: datetime):
    """Insert an event directly; defaults to one starting tomorrow."""

    def _make_event(
        title: str = "Test Event",
        date_time: datetime | None = None,
        location: str = "Main Hall",
        capacity: int = 10,
    ) -> Event:
        event = Event(
            title=title,
            date_time=date_time or now + timedelta(days=1),
            location=location,
            capacity=capacity,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def make_user(db_session: Session):
    counter = {"n": 0}

    def _make_user(name: str | None = None, email: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def register(db_session: Session):
    """Link a user to an event without going through the eligibility checks."""

    def _register(user: User, event: Event) -> Registration:
        registration = Registration(user_id=user.id, event_id=event.id)
        db_session.add(registration)
        db_session.commit()
        return registration

    return _register
