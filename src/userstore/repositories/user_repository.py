"""
User repository: the public data-access contract for the `user` entity.

UserRepository exposes four operations (register, get, list, delete) and
owns both query construction and error classification. It talks to storage
only through an `SQLExecutor`, so the same instance logic runs unchanged
against a live server, a disposable container, the in-process simulator, or
a scripted test double.

Error contract:
  - register -> InsertFailedError (DuplicateUserError for unique violations)
  - get      -> UserNotFoundError when no row matches, UserLookupError otherwise
  - list     -> ListFailedError
  - delete   -> DeleteFailedError (deleting a missing row is *not* an error)
"""
from __future__ import annotations

import logging
import time
from functools import partial

from sqlalchemy import delete, insert, select

from userstore.db.executor import SQLExecutor
from userstore.exceptions.mapper import map_insert_error, map_lookup_error, storage_error_handler
from userstore.exceptions.user_errors import DeleteFailedError, ListFailedError
from userstore.mappers.user_mapper import UserMapper
from userstore.models.user import User
from userstore.models.user_record import user_table

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Repository for User entity operations.

    Holds no state beyond the executor reference, so one instance can be
    shared by concurrent tasks; consistency (e.g. two registrations racing
    for the same name) is left to the database.
    """

    def __init__(self, executor: SQLExecutor):
        """
        Args:
            executor: the SQL execution handle every statement goes through.
        """
        self.executor = executor
        self.table = user_table

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def register(self, user: User) -> None:
        """
        Insert a new row built from `user`.

        Raises:
            DuplicateUserError: if `id` or `name` is already taken.
            InsertFailedError: for any other storage error.
        """
        logger.debug("repo.user.register.start", extra={"operation": "user.register", "user_id": user.id})

        start = time.perf_counter()
        stmt = insert(self.table).values(**UserMapper.to_row(user))

        async with storage_error_handler("user.register", map_insert_error, user_id=user.id):
            await self.executor.execute(stmt)

        logger.info(
            "repo.user.register.success",
            extra={
                "operation": "user.register",
                "user_id": user.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )

    async def delete(self, user: User) -> None:
        """
        Delete the row whose primary key is `user.id`.

        Zero affected rows is still a success: unlike `get`, this operation
        does not report a missing user.

        Raises:
            DeleteFailedError: for any storage error.
        """
        stmt = delete(self.table).where(self.table.c.id == user.id)

        async with storage_error_handler("user.delete", DeleteFailedError, user_id=user.id):
            rowcount = await self.executor.execute(stmt)

        if rowcount:
            logger.debug("repo.user.delete.success", extra={"operation": "user.delete", "user_id": user.id})
        else:
            logger.warning("repo.user.delete.no_rows", extra={"operation": "user.delete", "user_id": user.id})

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get(self, user_id: str) -> User:
        """
        Look up exactly one user by primary key.

        Example: SELECT id, name, age FROM user WHERE id = :id LIMIT 1

        Raises:
            UserNotFoundError: no row matched `user_id`.
            UserLookupError: any other storage error.
        """
        stmt = select(self.table).where(self.table.c.id == user_id).limit(1)

        async with storage_error_handler("user.get", partial(map_lookup_error, user_id=user_id), user_id=user_id):
            row = await self.executor.fetch_one(stmt)

        logger.debug("repo.user.get.success", extra={"operation": "user.get", "user_id": user_id})
        return UserMapper.from_row(row)

    async def list(self) -> list[User]:
        """
        Return every stored user, in whatever order the backend yields them.

        An empty table is an empty list, not an error.

        Raises:
            ListFailedError: for any storage error.
        """
        stmt = select(self.table)

        async with storage_error_handler("user.list", ListFailedError):
            rows = await self.executor.fetch_all(stmt)

        logger.debug("repo.user.list.success", extra={"operation": "user.list", "count": len(rows)})
        return UserMapper.from_rows(rows)
