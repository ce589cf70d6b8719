from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from events_api.core.errors import failure_boundary
from events_api.database.db import get_db
from events_api.schemas.events import (
    EventCreate,
    EventCreated,
    EventDetailOut,
    EventOut,
    EventStatsOut,
)
from events_api.services import events as event_service

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
def create_event(payload: Optional[EventCreate] = None, db: Session = Depends(get_db)):
    with failure_boundary("Failed to create event"):
        event = event_service.create_event(db, payload or EventCreate())
    return {"eventId": event.id}


@router.get("/upcoming", response_model=list[EventOut])
def list_upcoming_events(db: Session = Depends(get_db)):
    with failure_boundary("Failed to list upcoming events"):
        return event_service.list_upcoming_events(db)


@router.get("/{event_id}", response_model=EventDetailOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    """Event with its registered users (id, name and email only)."""
    with failure_boundary("Failed to fetch event"):
        return event_service.get_event_details(db, event_id)


@router.get("/{event_id}/stats", response_model=EventStatsOut)
def event_stats(event_id: str, db: Session = Depends(get_db)):
    with failure_boundary("Failed to get event stats"):
        return event_service.get_event_stats(db, event_id)
