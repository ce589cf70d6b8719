from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from events_api.core.errors import failure_boundary
from events_api.database.db import get_db
from events_api.schemas.users import UserCreate, UserCreated
from events_api.services.users import create_user

router = APIRouter(prefix="/events", tags=["users"])


# Lives under /events for compatibility with existing clients.
@router.post("/user", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(payload: Optional[UserCreate] = None, db: Session = Depends(get_db)):
    with failure_boundary("Failed to create user"):
        user = create_user(db, payload or UserCreate())
    return {"userId": user.id}
