import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from events_api.core.errors import DuplicateEmailError, MissingUserFieldsError
from events_api.database.constraints import ViolationKind, classify_integrity_error
from events_api.models.users import User
from events_api.schemas.users import UserCreate

logger = logging.getLogger(__name__)


def create_user(db: Session, payload: UserCreate) -> User:
    if not payload.name or not payload.email:
        raise MissingUserFieldsError()

    user = User(name=payload.name, email=payload.email)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        violation = classify_integrity_error(exc)
        if violation.kind is ViolationKind.UNIQUE and violation.field == "email":
            raise DuplicateEmailError() from exc
        raise
    db.refresh(user)
    logger.info("User %s created", user.id)
    return user
