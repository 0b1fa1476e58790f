"""
In-process SQL engine simulator.

A throwaway SQLite database (through aiosqlite) holding the `user` table
built from `Base.metadata`. Each simulator engine owns its own database file
in a temporary directory, so engines are isolated from one another, and the
regular connection pool gives every checkout its own connection, so one
engine can be shared by concurrent tasks.

SQLite allows one writer at a time. Transactions are opened with
`BEGIN IMMEDIATE`, which takes the write lock up front; a transaction that
finds it held waits (up to BUSY_TIMEOUT_SECONDS) instead of failing halfway.
"""
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Iterable

from sqlalchemy import event, insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from userstore.database.base import Base
from userstore.models import user_record  # noqa: F401 – import to register the table with Base.metadata
from userstore.models.user_record import UserRow, user_table

BUSY_TIMEOUT_SECONDS = 30.0


def simulator_url(path: str | Path) -> str:
    return f"sqlite+aiosqlite:///{Path(path)}"


def create_simulator_engine(path: str | Path, echo: bool = False) -> AsyncEngine:
    """
    Create an engine over the SQLite file at `path` (created on first connect).

    The caller owns the file; `simulator_engine()` handles both for you.
    """
    engine = create_async_engine(
        simulator_url(path),
        echo=echo,
        connect_args={"timeout": BUSY_TIMEOUT_SECONDS},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        # the driver's implicit BEGIN is replaced by the "begin" hook below
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def seed_rows(engine: AsyncEngine, rows: Iterable[UserRow]) -> None:
    """Insert rows directly, bypassing any repository."""
    rows = list(rows)
    if not rows:
        return
    async with engine.begin() as conn:
        await conn.execute(insert(user_table), rows)


@asynccontextmanager
async def simulator_engine(rows: Iterable[UserRow] = (), echo: bool = False) -> AsyncIterator[AsyncEngine]:
    """
    Yield a fresh simulator engine with the schema created and `rows` seeded.

    On exit the engine is disposed and its database file removed.
    """
    with tempfile.TemporaryDirectory(prefix="userstore-sim-") as tmp_dir:
        engine = create_simulator_engine(Path(tmp_dir) / "user.db", echo=echo)
        try:
            await create_schema(engine)
            await seed_rows(engine, rows)
            yield engine
        finally:
            await engine.dispose()
