"""Constraint-violation taxonomy raised by the records store.

The engine's ``IntegrityError`` is translated into one of these classes so that
callers can tell a duplicate e-mail from a dangling foreign key without parsing
driver messages themselves.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError

# códigos de error de MySQL/MariaDB
MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_COLUMN_NOT_NULL = 1048
MYSQL_NO_DEFAULT = 1364
MYSQL_ROW_IS_REFERENCED = (1451, 1217)
MYSQL_NO_REFERENCED_ROW = (1452, 1216)


class HospitalNetworkError(Exception):
    """Base de todos los errores del store."""


class RecordNotFound(HospitalNetworkError):
    def __init__(self, table: str, key, message: str | None = None) -> None:
        self.table = table
        self.key = key
        super().__init__(message or f"{table} row {key!r} does not exist")


class ConstraintViolation(HospitalNetworkError):
    def __init__(self, message: str, table: str | None = None) -> None:
        self.table = table
        super().__init__(message)


class ForeignKeyViolation(ConstraintViolation):
    pass


class UniqueConstraintViolation(ConstraintViolation):
    pass


class NotNullViolation(ConstraintViolation):
    pass


class RestrictedDeletion(ConstraintViolation):
    """Delete refused because rows outside the deletion closure still point at it.

    ``blockers`` maps each referencing table name to the number of rows that
    block the delete.
    """

    def __init__(self, table: str | None, key=None, blockers: dict[str, int] | None = None,
                 message: str | None = None) -> None:
        self.key = key
        self.blockers = blockers or {}
        if message is None:
            refs = ", ".join(f"{name} ({count} row{'s' if count != 1 else ''})"
                             for name, count in sorted(self.blockers.items()))
            message = f"cannot delete {table} row {key!r}: still referenced by {refs}"
        super().__init__(message, table=table)


def _driver_code(exc: IntegrityError) -> int | None:
    args = getattr(exc.orig, "args", None) or ()
    if args and isinstance(args[0], int):
        return args[0]
    return None


def classify_integrity_error(exc: IntegrityError, operation: str = "insert") -> ConstraintViolation:
    """Map a driver ``IntegrityError`` onto the store's taxonomy.

    ``operation`` disambiguates SQLite, which reports both a dangling reference
    and a restricted delete as ``FOREIGN KEY constraint failed``.
    """
    code = _driver_code(exc)
    message = str(exc.orig) if exc.orig is not None else str(exc)
    lowered = message.lower()

    if code == MYSQL_DUPLICATE_ENTRY or "unique constraint" in lowered or "duplicate entry" in lowered:
        return UniqueConstraintViolation(message)
    if code in (MYSQL_COLUMN_NOT_NULL, MYSQL_NO_DEFAULT) or "not null constraint" in lowered \
            or "cannot be null" in lowered:
        return NotNullViolation(message)
    if code in MYSQL_ROW_IS_REFERENCED:
        return RestrictedDeletion(None, message=message)
    if code in MYSQL_NO_REFERENCED_ROW:
        return ForeignKeyViolation(message)
    if "foreign key constraint" in lowered:
        if operation == "delete":
            return RestrictedDeletion(None, message=message)
        return ForeignKeyViolation(message)
    return ConstraintViolation(message)


@contextmanager
def integrity_errors(operation: str = "insert") -> Iterator[None]:
    """Wrap a flush/execute and re-raise ``IntegrityError`` as a ``ConstraintViolation``."""
    try:
        yield
    except IntegrityError as exc:
        raise classify_integrity_error(exc, operation) from exc
