from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from events_api.schemas.users import UserBrief


# ---------- Event ----------
class EventCreate(BaseModel):
    # Presence and ranges are checked by the service so that every
    # failure gets the same 400 body.
    title: Optional[str] = None
    date_time: Optional[str] = None
    location: Optional[str] = None
    capacity: Any = None


class EventCreated(BaseModel):
    eventId: str


class EventOut(BaseModel):
    id: str
    title: str
    date_time: datetime
    location: str
    capacity: int
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class EventDetailOut(EventOut):
    users: list[UserBrief]


class EventStatsOut(BaseModel):
    totalRegistrations: int
    remainingCapacity: int
    percentUsed: float
