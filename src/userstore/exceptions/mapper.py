import re
import logging
from contextlib import asynccontextmanager
from typing import Any, Callable

from sqlalchemy import Table
from sqlalchemy.exc import IntegrityError, NoResultFound

from .integrity_classifier import classify_integrity_error, UniqueConstraintError
from .base import RepositoryError
from .user_errors import DuplicateUserError, InsertFailedError, UserLookupError, UserNotFoundError
from userstore.models.user_record import user_table

logger = logging.getLogger(__name__)

# Error codes that describe an expected, caller-level outcome rather than a broken backend.
EXPECTED_ERROR_CODES = frozenset({"not_found", "duplicate"})

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # SQLite: 'UNIQUE constraint failed: user.name' / 'NOT NULL constraint failed: user.name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[\w.]+(?:,\s*[\w.]+)*)', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]

    return None


def _extract_columns_mysql(msg: str) -> list[str] | None:
    # MySQL 8: "Duplicate entry 'Mike' for key 'user.name'" (PRIMARY for the primary key)
    m = re.search(r"Duplicate entry .* for key '?(?P<key>[^']+)'?", msg, flags=re.IGNORECASE)
    if m:
        return [m.group("key").split(".")[-1]]

    # NOT NULL: "Column 'name' cannot be null"
    m = re.search(r"Column '(?P<col>[^']+)' cannot be null", msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    return None


def _resolve_key_names(names: list[str], table: Table) -> list[str]:
    """
    Replace index/constraint names with the columns they cover.

    MySQL reports the key, not the column: "PRIMARY" for the primary key,
    the column name for an inline UNIQUE, or a named constraint such as
    "uq_user_name" when the table was created from metadata.
    """
    keys: dict[str, list[str]] = {"primary": [c.name for c in table.primary_key.columns]}
    for constraint in table.constraints:
        if constraint.name:
            keys[str(constraint.name).lower()] = [c.name for c in constraint.columns]

    resolved: list[str] = []
    for name in names:
        if name in table.c:
            resolved.append(name)
        else:
            resolved.extend(keys.get(name.lower(), [name]))
    return resolved


def extract_columns_from_integrity(exc: IntegrityError, table: Table | None = None) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (SQLite, MySQL).

    With `table`, key and constraint names are translated to its column names.
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    for extract in (_extract_columns_sqlite, _extract_columns_mysql):
        cols = extract(msg)
        if cols:
            return _resolve_key_names(cols, table) if table is not None else cols

    return None


# -----------------------
# Mappers
# -----------------------

def map_insert_error(exc: Exception) -> InsertFailedError:
    """
    Map a storage error raised while inserting a user to an app-level exception.

    Unique violations become DuplicateUserError (populating `.fields` and
    `.constraint` where possible); everything else is a plain InsertFailedError.
    Both render as "failed to insert user: <cause>".
    """
    if not isinstance(exc, IntegrityError):
        return InsertFailedError(exc)

    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc, user_table)

    if exc_cls is UniqueConstraintError:
        return DuplicateUserError(exc, fields=columns, constraint=constraint_name)

    return InsertFailedError(exc, fields=columns, constraint=constraint_name)


def map_lookup_error(exc: Exception, user_id: str) -> RepositoryError:
    """
    Map a storage error raised by a primary-key lookup.

    NoResultFound (zero rows) is the only "not found" signal; anything else,
    including errors a test double raises, is a lookup failure.
    """
    if isinstance(exc, NoResultFound):
        return UserNotFoundError(user_id, exc)
    return UserLookupError(user_id, exc)


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def storage_error_handler(operation: str, map_error: Callable[[Exception], RepositoryError], **context: Any):
    """
    Usage:
        async with storage_error_handler("user.list", ListFailedError):
            ... executor calls that may raise ...

    Any Exception raised inside the block is converted with `map_error`,
    logged, and re-raised with the original error chained as __cause__.
    Cancellation (asyncio.CancelledError) is a BaseException and passes
    through untouched.
    """
    try:
        yield
    except Exception as exc:
        error = map_error(exc)
        extra = {"operation": operation, **context, **error.to_log_context()}

        if error.error_code in EXPECTED_ERROR_CODES:
            # Expected client-level outcome: no stack trace
            logger.info("repo.%s.%s", operation, error.error_code, extra=extra)
        else:
            logger.exception("repo.%s.failed", operation, extra=extra)

        raise error from exc
