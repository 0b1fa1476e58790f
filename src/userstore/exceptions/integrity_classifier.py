r"""
Classification of SQL-level integrity errors.

The constraint classes below are internal labels: they describe *what* the
database rejected and are only ever returned by `classify_integrity_error()`.
`mapper.py` turns them into the public errors repositories raise
(`DuplicateUserError`, `InsertFailedError`, ...), so callers never depend on
driver exception types or server error numbers.

| Constraint-level (internal) | → | App-level (external)  |
| --------------------------- | - | --------------------- |
| `UniqueConstraintError`     | → | `DuplicateUserError`  |
| anything else               | → | `InsertFailedError`   |

Detection order:
  1. MySQL errno (aiomysql / PyMySQL put it in `orig.args[0]`)
  2. message keywords (SQLite and anything unrecognised)
"""
import re
import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError
from .base import RepositoryError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions
# =================================================================================================================


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations (subclass of RepositoryError)."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""
    pass


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated."""
    pass


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""
    pass


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""
    pass


# =================================================================================================================
# MySQL error number mapping
# =================================================================================================================

# https://dev.mysql.com/doc/mysql-errors/8.0/en/server-error-reference.html
class MySQLErrorCodes(int, Enum):
    DUP_ENTRY = 1062
    BAD_NULL_ERROR = 1048
    ROW_IS_REFERENCED_2 = 1451
    NO_REFERENCED_ROW_2 = 1452
    CHECK_CONSTRAINT_VIOLATED = 3819


MYSQL_ERRNO_EXCEPTION_MAP = {
    MySQLErrorCodes.DUP_ENTRY: UniqueConstraintError,
    MySQLErrorCodes.BAD_NULL_ERROR: NotNullConstraintError,
    MySQLErrorCodes.ROW_IS_REFERENCED_2: ForeignKeyConstraintError,
    MySQLErrorCodes.NO_REFERENCED_ROW_2: ForeignKeyConstraintError,
    MySQLErrorCodes.CHECK_CONSTRAINT_VIOLATED: CheckConstraintError,
}


# =================================================================================================================
# Integrity Error Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


# "Duplicate entry 'Mike' for key 'user.name'" (MySQL 8 prefixes the table name)
_MYSQL_DUP_KEY = re.compile(r"for key '(?:[^'.]+\.)?(?P<key>[^']+)'")


def _classify_from_mysql_errno(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    """
    Classify MySQL integrity error based on the server error number.

    Duplicate-entry errors also name the violated key, reported as the constraint name.
    """
    args = getattr(orig, "args", None) or ()
    errno = args[0] if args and isinstance(args[0], int) else None
    if errno is None:
        return None, None

    exception_class = MYSQL_ERRNO_EXCEPTION_MAP.get(errno)
    if exception_class:
        constraint_name = None
        if errno == MySQLErrorCodes.DUP_ENTRY:
            m = _MYSQL_DUP_KEY.search(str(orig))
            constraint_name = m.group("key") if m else None
        logger.debug("MySQL integrity diagnostic",
                     extra={"mysql_errno": errno, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning("Unknown MySQL integrity error number encountered", extra={"mysql_errno": errno})
    return UnknownIntegrityError, None


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    """
    Classify integrity error based on message content (fallback for SQLite and the rest).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "duplicate"]):
        return UniqueConstraintError, None

    if _match_any(normalized, ["not null constraint", "not null", "cannot be null"]):
        return NotNullConstraintError, None

    if _match_any(normalized, ["foreign key constraint", "foreign key"]):
        return ForeignKeyConstraintError, None

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError, None

    # Unknown generic message - warn so it surfaces to monitoring
    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    logger.debug("Unknown integrity raw message", extra={"raw": msg})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Heuristically classify a SQLAlchemy IntegrityError into a specific ConstraintViolationError subclass.

    Returns:
        A tuple of (ExceptionClass, constraint_name if available)
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_mysql_errno(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    # Fallback to generic message parsing
    return _classify_from_generic_message(str(orig))
