"""
Registering users for events and cancelling those registrations.

``register_for_event`` performs every eligibility check and the insert
inside one session transaction.  The event row is read with
``FOR UPDATE`` so concurrent registrations for the same event queue up
behind each other on engines with row locks.  File backed SQLite
engines start every transaction with ``BEGIN IMMEDIATE`` instead (see
``database.db.build_engine``), which gives the same guarantee for the
whole database.  The composite primary key
on ``registrations`` is the last line against duplicates: a violation
raised at commit is reported the same way as the explicit check.
"""

import logging
from datetime import datetime
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from events_api.core.errors import (
    AlreadyRegisteredError,
    EventFullError,
    EventNotFoundError,
    NotRegisteredError,
    PastEventError,
    UserIdRequiredError,
    UserNotFoundError,
)
from events_api.database.constraints import ViolationKind, classify_integrity_error
from events_api.database.db import utcnow
from events_api.models.events import Event
from events_api.models.registrations import Registration
from events_api.models.users import User

logger = logging.getLogger(__name__)


def _require_user_id(user_id: Union[str, int, None]) -> str:
    if not user_id:
        raise UserIdRequiredError()
    return str(user_id)


def register_for_event(
    db: Session,
    *,
    event_id: str,
    user_id: Union[str, int, None],
    now: Optional[datetime] = None,
) -> Registration:
    """Register ``user_id`` for ``event_id``.

    Checks run in this order and the first failure wins: user id given,
    event exists, event not in the past, event not full, user not
    already registered, user exists.
    """
    user_id = _require_user_id(user_id)

    event = db.scalar(select(Event).where(Event.id == event_id).with_for_update())
    if event is None:
        raise EventNotFoundError(event_id)

    now = now or utcnow()
    if event.date_time < now:
        raise PastEventError()

    registrant_ids = set(
        db.scalars(select(Registration.user_id).where(Registration.event_id == event.id))
    )
    if len(registrant_ids) >= event.capacity:
        raise EventFullError()
    if user_id in registrant_ids:
        raise AlreadyRegisteredError()

    if db.get(User, user_id) is None:
        raise UserNotFoundError(user_id)

    registration = Registration(user_id=user_id, event_id=event.id)
    db.add(registration)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        violation = classify_integrity_error(exc)
        if violation.kind is ViolationKind.UNIQUE:
            raise AlreadyRegisteredError() from exc
        if violation.kind is ViolationKind.FOREIGN_KEY:
            raise UserNotFoundError(user_id) from exc
        raise
    logger.info("User %s registered for event %s", user_id, event.id)
    return registration


def cancel_registration(db: Session, *, event_id: str, user_id: Union[str, int, None]) -> None:
    user_id = _require_user_id(user_id)

    event = db.get(Event, event_id)
    if event is None:
        raise EventNotFoundError(event_id)

    registration = db.get(Registration, (user_id, event.id))
    if registration is None:
        raise NotRegisteredError()

    db.delete(registration)
    db.commit()
    logger.info("User %s cancelled registration for event %s", user_id, event.id)
