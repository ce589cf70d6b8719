"""Domain errors and their HTTP mapping."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_EVENT_FIELDS = "MISSING_EVENT_FIELDS"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    INVALID_DATE_TIME = "INVALID_DATE_TIME"
    USER_ID_REQUIRED = "USER_ID_REQUIRED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PAST_EVENT = "PAST_EVENT"
    EVENT_FULL = "EVENT_FULL"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"
    MISSING_USER_FIELDS = "MISSING_USER_FIELDS"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    OPERATION_FAILED = "OPERATION_FAILED"


HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.MISSING_EVENT_FIELDS: 400,
    ErrorCode.INVALID_CAPACITY: 400,
    ErrorCode.INVALID_DATE_TIME: 400,
    ErrorCode.USER_ID_REQUIRED: 400,
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.PAST_EVENT: 400,
    ErrorCode.EVENT_FULL: 400,
    ErrorCode.ALREADY_REGISTERED: 400,
    ErrorCode.NOT_REGISTERED: 400,
    ErrorCode.MISSING_USER_FIELDS: 400,
    ErrorCode.DUPLICATE_EMAIL: 400,
    ErrorCode.OPERATION_FAILED: 500,
}


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    details: Optional[str] = None

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.code]

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class MissingEventFieldsError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.MISSING_EVENT_FIELDS, message="All fields are required.")


class InvalidCapacityError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CAPACITY,
            message="Capacity must be a number between 1 and 1000.",
        )


class InvalidDateTimeError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_DATE_TIME, message="date_time must be a valid date.")


class UserIdRequiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.USER_ID_REQUIRED, message="userId is required")


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class UserNotFoundError(DomainError):
    """Raised when a registration names a user that does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(code=ErrorCode.USER_NOT_FOUND, message="User not found")
        self.user_id = user_id


class PastEventError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.PAST_EVENT, message="Cannot register for past events")


class EventFullError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EVENT_FULL, message="Event is full")


class AlreadyRegisteredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message="User already registered for this event",
        )


class NotRegisteredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_REGISTERED,
            message="User is not registered for this event",
        )


class MissingUserFieldsError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.MISSING_USER_FIELDS, message="Name and email are required")


class DuplicateEmailError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.DUPLICATE_EMAIL, message="Email already exists")


class OperationFailedError(DomainError):
    """Unexpected failure (usually storage) surfaced as a 500."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.OPERATION_FAILED, message=message, details=details)


@contextmanager
def failure_boundary(message: str) -> Iterator[None]:
    """Re-raise anything that is not a ``DomainError`` as ``OperationFailedError``.

    ``message`` becomes the response ``error``; the original exception
    text is attached as ``details``.
    """
    try:
        yield
    except DomainError:
        raise
    except Exception as exc:
        logger.exception(message)
        raise OperationFailedError(message, details=str(exc)) from exc
