"""
SQL execution handle used by repositories.

`SQLExecutor` is the only thing a repository knows about its backend: run a
parameterized SQLAlchemy Core statement and hand back rows, a single row, or an
affected-row count. Anything that implements these three coroutines can stand
behind a repository: a live server, a disposable container, the in-process
simulator, or a scripted test double.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.base import Executable

logger = logging.getLogger(__name__)


@runtime_checkable
class SQLExecutor(Protocol):
    """
    Execute a parameterized statement and return rows, a row, or a row count.

    Implementations must raise `sqlalchemy.exc.NoResultFound` from
    `fetch_one()` when the statement matches no row; repositories rely on that
    exception type to tell "not found" apart from every other failure.
    """

    async def fetch_one(self, statement: Executable) -> Mapping[str, Any]:
        ...

    async def fetch_all(self, statement: Executable) -> Sequence[Mapping[str, Any]]:
        ...

    async def execute(self, statement: Executable) -> int:
        ...


class SQLAlchemyExecutor:
    """
    SQLExecutor backed by an `AsyncEngine`.

    Each call checks out its own connection, so one executor can be shared by
    concurrent tasks. Writes run inside `engine.begin()` and are committed
    when the statement succeeds (rolled back otherwise).
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def fetch_one(self, statement: Executable) -> Mapping[str, Any]:
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            # .one() raises NoResultFound on zero rows, MultipleResultsFound on more than one
            return result.mappings().one()

    async def fetch_all(self, statement: Executable) -> Sequence[Mapping[str, Any]]:
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            rows = result.mappings().all()
            logger.debug("executor.fetch_all", extra={"row_count": len(rows)})
            return rows

    async def execute(self, statement: Executable) -> int:
        async with self.engine.begin() as conn:
            result = await conn.execute(statement)
            return result.rowcount

    def __repr__(self) -> str:
        return f"<SQLAlchemyExecutor(url={self.engine.url.render_as_string(hide_password=True)!r})>"
