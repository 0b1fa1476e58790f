# userstore/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (RepositoryError, NotFoundError)
# │   ├── user_errors.py             # Errors raised by UserRepository
# │   ├── integrity_classifier.py    # SQL-level / DB-specific errors
# │   └── mapper.py                  # Map SQL-level / DB-specific errors to app-level errors

from .base import RepositoryError, NotFoundError
from .user_errors import (
    UserNotFoundError,
    UserLookupError,
    InsertFailedError,
    DuplicateUserError,
    ListFailedError,
    DeleteFailedError,
)

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "UserNotFoundError",
    "UserLookupError",
    "InsertFailedError",
    "DuplicateUserError",
    "ListFailedError",
    "DeleteFailedError",
]
