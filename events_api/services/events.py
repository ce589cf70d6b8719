import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from events_api.core.errors import (
    EventNotFoundError,
    InvalidCapacityError,
    InvalidDateTimeError,
    MissingEventFieldsError,
)
from events_api.database.db import utcnow
from events_api.models.events import MAX_CAPACITY, MIN_CAPACITY, Event
from events_api.models.registrations import Registration
from events_api.models.users import User
from events_api.schemas.events import EventCreate

logger = logging.getLogger(__name__)

_datetime_adapter = TypeAdapter(datetime)


def parse_capacity(value: Any) -> int:
    """Coerce a capacity the way a loose JSON client would send it.

    Accepts ints, integral floats and numeric strings.  Booleans,
    fractions and anything outside [MIN_CAPACITY, MAX_CAPACITY] are
    rejected.
    """
    if isinstance(value, bool):
        raise InvalidCapacityError()
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidCapacityError()
    if not number.is_finite():
        raise InvalidCapacityError()
    # Range check on the Decimal: int() of "1e2000000" would build the whole number
    if number < MIN_CAPACITY or number > MAX_CAPACITY:
        raise InvalidCapacityError()
    if number != number.to_integral_value():
        raise InvalidCapacityError()
    return int(number)


def parse_date_time(value: str) -> datetime:
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        raise InvalidDateTimeError()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def create_event(db: Session, payload: EventCreate) -> Event:
    if not payload.title or not payload.date_time or not payload.location or not payload.capacity:
        raise MissingEventFieldsError()
    capacity = parse_capacity(payload.capacity)
    date_time = parse_date_time(payload.date_time)

    event = Event(
        title=payload.title,
        date_time=date_time,
        location=payload.location,
        capacity=capacity,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Event %s created (%s, capacity %s)", event.id, event.title, event.capacity)
    return event


def list_upcoming_events(db: Session, now: Optional[datetime] = None) -> list[Event]:
    """Events starting strictly after ``now``, soonest first, then by location."""
    now = now or utcnow()
    stmt = (
        select(Event)
        .where(Event.date_time > now)
        .order_by(Event.date_time.asc(), Event.location.asc())
    )
    return list(db.scalars(stmt))


def get_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


def get_registered_users(db: Session, event_id: str) -> list[User]:
    stmt = (
        select(User)
        .join(Registration, Registration.user_id == User.id)
        .where(Registration.event_id == event_id)
        .order_by(Registration.created_at.asc(), User.name.asc())
    )
    return list(db.scalars(stmt))


def get_event_details(db: Session, event_id: str) -> dict:
    """Event row plus its registrants as ``{id, name, email}``."""
    event = get_event(db, event_id)
    users = get_registered_users(db, event.id)
    return {
        "id": event.id,
        "title": event.title,
        "date_time": event.date_time,
        "location": event.location,
        "capacity": event.capacity,
        "created_at": event.created_at,
        "updated_at": event.updated_at,
        "users": [{"id": u.id, "name": u.name, "email": u.email} for u in users],
    }


def count_registrations(db: Session, event_id: str) -> int:
    total = db.scalar(
        select(func.count()).select_from(Registration).where(Registration.event_id == event_id)
    )
    return int(total or 0)


def get_event_stats(db: Session, event_id: str) -> dict:
    event = get_event(db, event_id)
    total = count_registrations(db, event.id)

    if event.capacity > 0:
        # Ties round up (0.125 -> 0.13), not to even
        percent = Decimal(total * 100) / Decimal(event.capacity)
        percent_used = float(percent.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    else:
        percent_used = 0.0

    return {
        "totalRegistrations": total,
        "remainingCapacity": event.capacity - total,
        "percentUsed": percent_used,
    }
