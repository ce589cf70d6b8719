"""Structured view of integrity errors raised by the database.

Services should never look at driver messages.  ``classify_integrity_error``
turns a SQLAlchemy ``IntegrityError`` into a ``ConstraintViolation``
carrying the violation kind, the constraint name (when the driver
reports it) and the offending field.

PostgreSQL drivers expose the SQLSTATE and constraint name directly.
SQLite only reports a message such as
``UNIQUE constraint failed: users.email``, so the table/column list
from that message is matched against the known constraints below.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError


class ViolationKind(str, enum.Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    NOT_NULL = "not_null"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConstraintViolation:
    kind: ViolationKind
    constraint: Optional[str] = None
    field: Optional[str] = None


# constraint name -> (kind, field)
KNOWN_CONSTRAINTS: dict[str, tuple[ViolationKind, str]] = {
    "uq_users_email": (ViolationKind.UNIQUE, "email"),
    "pk_registrations": (ViolationKind.UNIQUE, "user_id,event_id"),
    "fk_registrations_user_id_users": (ViolationKind.FOREIGN_KEY, "user_id"),
    "fk_registrations_event_id_events": (ViolationKind.FOREIGN_KEY, "event_id"),
    "ck_events_capacity_range": (ViolationKind.CHECK, "capacity"),
}

# SQLite reports columns instead of constraint names for these
SQLITE_COLUMNS: dict[str, str] = {
    "users.email": "uq_users_email",
    "registrations.user_id, registrations.event_id": "pk_registrations",
}

SQLSTATE_KINDS: dict[str, ViolationKind] = {
    "23505": ViolationKind.UNIQUE,
    "23503": ViolationKind.FOREIGN_KEY,
    "23514": ViolationKind.CHECK,
    "23502": ViolationKind.NOT_NULL,
}

SQLITE_PREFIXES: dict[str, ViolationKind] = {
    "UNIQUE constraint failed": ViolationKind.UNIQUE,
    "FOREIGN KEY constraint failed": ViolationKind.FOREIGN_KEY,
    "CHECK constraint failed": ViolationKind.CHECK,
    "NOT NULL constraint failed": ViolationKind.NOT_NULL,
}


def _from_constraint_name(kind: ViolationKind, name: Optional[str]) -> ConstraintViolation:
    if name in KNOWN_CONSTRAINTS:
        known_kind, field = KNOWN_CONSTRAINTS[name]
        return ConstraintViolation(kind=known_kind, constraint=name, field=field)
    return ConstraintViolation(kind=kind, constraint=name)


def _classify_postgres(orig) -> Optional[ConstraintViolation]:
    # psycopg 3 exposes ``sqlstate``, psycopg2 ``pgcode``
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate not in SQLSTATE_KINDS:
        return None
    diag = getattr(orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    return _from_constraint_name(SQLSTATE_KINDS[sqlstate], name)


def _classify_sqlite(message: str) -> Optional[ConstraintViolation]:
    for prefix, kind in SQLITE_PREFIXES.items():
        if not message.startswith(prefix):
            continue
        subject = message[len(prefix):].lstrip(": ").strip()
        if subject in SQLITE_COLUMNS:
            return _from_constraint_name(kind, SQLITE_COLUMNS[subject])
        if subject in KNOWN_CONSTRAINTS:
            return _from_constraint_name(kind, subject)
        if kind is ViolationKind.NOT_NULL and "." in subject:
            return ConstraintViolation(kind=kind, field=subject.split(".", 1)[1])
        return ConstraintViolation(kind=kind)
    return None


def classify_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    orig = exc.orig
    violation = _classify_postgres(orig)
    if violation is None:
        violation = _classify_sqlite(str(orig))
    return violation or ConstraintViolation(kind=ViolationKind.UNKNOWN)
