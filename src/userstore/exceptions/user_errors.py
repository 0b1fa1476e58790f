"""
Errors raised by UserRepository.

Only `get` tells "not found" apart from other failures; `register`, `list`
and `delete` wrap whatever the backend raised behind a fixed description.
"""

from typing import Iterable

from .base import NotFoundError, RepositoryError


class UserNotFoundError(NotFoundError):
    """`get` matched no row for `user_id`."""

    def __init__(self, user_id: str, cause: BaseException):
        super().__init__(f"user was not found (id: {user_id})", cause=cause, fields=["id"])
        self.user_id = user_id


class UserLookupError(RepositoryError):
    """`get` failed for any reason other than "no rows"."""

    def __init__(self, user_id: str, cause: BaseException):
        super().__init__(f"failed to get user (id: {user_id})", cause=cause, error_code="lookup_failed")
        self.user_id = user_id


class InsertFailedError(RepositoryError):
    def __init__(self, cause: BaseException, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str = "insert_failed"):
        super().__init__("failed to insert user", cause=cause, fields=fields,
                         constraint=constraint, error_code=error_code)


class DuplicateUserError(InsertFailedError):
    """
    `register` hit a unique constraint (on `id` or `name`).

    Still an InsertFailedError with the same message; the subclass only lets
    callers that care branch on duplicates.
    """

    def __init__(self, cause: BaseException, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        super().__init__(cause, fields=fields, constraint=constraint, error_code="duplicate")


class ListFailedError(RepositoryError):
    def __init__(self, cause: BaseException):
        super().__init__("failed to list users", cause=cause, error_code="list_failed")


class DeleteFailedError(RepositoryError):
    def __init__(self, cause: BaseException):
        super().__init__("failed to delete user", cause=cause, error_code="delete_failed")


__all__ = [
    "UserNotFoundError",
    "UserLookupError",
    "InsertFailedError",
    "DuplicateUserError",
    "ListFailedError",
    "DeleteFailedError",
]
