from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from events_api.core.errors import failure_boundary
from events_api.database.db import get_db
from events_api.schemas.registrations import MessageOut, RegistrationRequest
from events_api.services.registrations import cancel_registration, register_for_event

router = APIRouter(prefix="/events", tags=["registrations"])


@router.post("/{event_id}/register", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def register(event_id: str, payload: Optional[RegistrationRequest] = None, db: Session = Depends(get_db)):
    with failure_boundary("Failed to register"):
        register_for_event(db, event_id=event_id, user_id=payload.userId if payload else None)
    return {"message": "Registration successful"}


@router.post("/{event_id}/cancel", response_model=MessageOut)
def cancel(event_id: str, payload: Optional[RegistrationRequest] = None, db: Session = Depends(get_db)):
    with failure_boundary("Failed to cancel registration"):
        cancel_registration(db, event_id=event_id, user_id=payload.userId if payload else None)
    return {"message": "Registration cancelled"}
