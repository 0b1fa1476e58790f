"""
The same scenarios against every backend.

Mock and simulator tests always run; the mock is scripted with the answers a
real table gives. Container tests need Docker and live tests need
TEST_DATABASE_URL; their fixtures skip when the backend is unavailable.
Live runs start by clearing the table, since that database outlives the test.
"""
import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from userstore.db.executor import SQLAlchemyExecutor
from userstore.models.user import User
from userstore.repositories.user_repository import UserRepository
from userstore.tests.test_fixtures.backend_fixtures import container_engine, start_mysql_container
from userstore.tests.test_fixtures.scripted_executor import ScriptedExecutor

from . import scenarios


def _row(user: User) -> dict:
    return {"id": user.id, "name": user.name, "age": user.age}


@pytest.mark.asyncio
class TestScriptedBackend:
    """The scripted executor replays what a real table would have answered."""

    async def test_register_get_delete(self, scripted_repository: UserRepository,
                                       scripted_executor: ScriptedExecutor, mike: User, bob: User):
        scripted_executor.expect_exec(r"^INSERT INTO").with_args(mike.id, mike.name, mike.age).will_return_result(1)
        scripted_executor.expect_exec(r"^INSERT INTO").with_args(bob.id, bob.name, bob.age).will_return_result(1)
        scripted_executor.expect_query(r"^SELECT .+ WHERE").with_args(mike.id).will_return_rows(_row(mike))
        scripted_executor.expect_query(r"^SELECT .+ FROM .?user.?$").will_return_rows(_row(mike), _row(bob))
        scripted_executor.expect_exec(r"^DELETE FROM").with_args(mike.id).will_return_result(1)
        scripted_executor.expect_exec(r"^DELETE FROM").with_args(mike.id).will_return_result(0)
        scripted_executor.expect_query(r"^SELECT .+ FROM .?user.?$").will_return_rows(_row(bob))

        await scenarios.register_get_delete(scripted_repository, mike, bob)

        scripted_executor.assert_expectations_met()

    async def test_get_missing(self, scripted_repository: UserRepository,
                               scripted_executor: ScriptedExecutor, mike: User, bob: User):
        scripted_executor.expect_exec(r"^INSERT INTO").will_return_result(1)
        scripted_executor.expect_query(r"^SELECT .+ WHERE").with_args(bob.id).will_return_rows()

        await scenarios.get_missing(scripted_repository, mike, bob)

    async def test_duplicate_name(self, scripted_repository: UserRepository,
                                  scripted_executor: ScriptedExecutor, mike: User):
        duplicate = IntegrityError(
            "INSERT INTO user (id, name, age) VALUES (%s, %s, %s)", {},
            Exception(1062, "Duplicate entry 'Mike' for key 'user.name'"),
        )
        scripted_executor.expect_exec(r"^INSERT INTO").will_return_result(1)
        scripted_executor.expect_exec(r"^INSERT INTO").will_return_error(duplicate)

        await scenarios.duplicate_name(scripted_repository, mike)


@pytest.mark.asyncio
class TestSimulatorBackend:

    async def test_register_get_delete(self, simulator_repository: UserRepository, mike: User, bob: User):
        await scenarios.register_get_delete(simulator_repository, mike, bob)

    async def test_get_missing(self, simulator_repository: UserRepository, mike: User, bob: User):
        await scenarios.get_missing(simulator_repository, mike, bob)

    async def test_duplicate_name(self, simulator_repository: UserRepository, mike: User):
        await scenarios.duplicate_name(simulator_repository, mike)


@pytest.mark.container
@pytest.mark.asyncio
class TestContainerBackend:

    async def test_register_get_delete(self, container_repository: UserRepository, mike: User, bob: User):
        await scenarios.register_get_delete(container_repository, mike, bob)

    async def test_get_missing(self, container_repository: UserRepository, mike: User, bob: User):
        await scenarios.get_missing(container_repository, mike, bob)

    async def test_duplicate_name(self, container_repository: UserRepository, mike: User):
        await scenarios.duplicate_name(container_repository, mike)

    async def test_concurrent_containers_are_isolated(self, mike: User, bob: User):
        async def scenario(user: User) -> list[User]:
            # start()/stop() block, so they run in worker threads and both containers boot at once
            container = await asyncio.to_thread(start_mysql_container)
            try:
                engine = await container_engine(container)
                try:
                    repo = UserRepository(SQLAlchemyExecutor(engine))
                    await repo.register(user)
                    return await repo.list()
                finally:
                    await engine.dispose()
            finally:
                await asyncio.to_thread(container.stop)

        results = await asyncio.gather(scenario(mike), scenario(bob), return_exceptions=True)
        # a skip (no Docker) or failure in either scenario is re-raised only after both have cleaned up
        for result in results:
            if isinstance(result, BaseException):
                raise result

        first, second = results
        assert first == [mike]
        assert second == [bob]


@pytest.mark.live
@pytest.mark.asyncio
class TestLiveBackend:

    async def test_register_get_delete(self, live_repository: UserRepository, mike: User, bob: User):
        await scenarios.clear(live_repository)
        try:
            await scenarios.register_get_delete(live_repository, mike, bob)
        finally:
            await scenarios.clear(live_repository)

    async def test_get_missing(self, live_repository: UserRepository, mike: User, bob: User):
        await scenarios.clear(live_repository)
        try:
            await scenarios.get_missing(live_repository, mike, bob)
        finally:
            await scenarios.clear(live_repository)

    async def test_duplicate_name(self, live_repository: UserRepository, mike: User):
        await scenarios.clear(live_repository)
        try:
            await scenarios.duplicate_name(live_repository, mike)
        finally:
            await scenarios.clear(live_repository)
