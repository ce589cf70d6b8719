"""
Test database models (Event, User and Registration).
"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from events_api.models.events import Event
from events_api.models.registrations import Registration
from events_api.models.users import User


class TestEventModel:
    def test_create_event(self, db_session: Session, now: datetime):
        """Test creating an event."""
        event = Event(title="Test Event", date_time=now + timedelta(days=1), location="Hall", capacity=100)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert len(event.id) == 36
        assert event.created_at is not None
        assert event.updated_at is not None

    def test_date_time_round_trips_as_utc(self, db_session: Session):
        """Test date_time is stored and returned as UTC."""
        local = timezone(timedelta(hours=5))
        event = Event(
            title="Offset",
            date_time=datetime(2031, 5, 1, 12, 0, tzinfo=local),
            location="Hall",
            capacity=10,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert event.date_time == datetime(2031, 5, 1, 7, 0, tzinfo=timezone.utc)
        assert event.date_time.tzinfo == timezone.utc


class TestRegistrationModel:
    def test_relationships(self, db_session: Session, make_event, make_user, register):
        """Test the relationships between Event, User and Registration."""
        event = make_event()
        user = make_user()
        register(user, event)

        db_session.refresh(event)
        db_session.refresh(user)

        assert [r.user_id for r in event.registrations] == [user.id]
        assert [r.event_id for r in user.registrations] == [event.id]

    def test_deleting_event_removes_registrations(self, db_session: Session, make_event, make_user, register):
        """Test deleting an event cascades to its registrations."""
        event = make_event()
        register(make_user(), event)

        db_session.delete(event)
        db_session.commit()

        assert db_session.scalars(select(Registration)).all() == []
        assert len(db_session.scalars(select(User)).all()) == 1
