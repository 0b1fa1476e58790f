"""Fixtures for repository tests."""

import itertools

import pytest

from userstore.models.user import User
from userstore.repositories.user_repository import UserRepository
from userstore.tests.test_fixtures.scripted_executor import ScriptedExecutor

# Canonical test users; ids are 26-character ULID-shaped strings.
MIKE = User(id="0123456789ABCDEFGHJKMNPQRS", name="Mike", age=20)
BOB = User(id="1123456789ABCDEFGHJKMNPQRS", name="Bob", age=25)


@pytest.fixture
def mike() -> User:
    return MIKE


@pytest.fixture
def bob() -> User:
    return BOB


@pytest.fixture
def user_factory():
    """
    A small factory helper for tests that need many distinct users.

    Usage:
        user = user_factory(age=41)
    """
    counter = itertools.count(1)

    def _create(**overrides) -> User:
        n = next(counter)
        data = {
            "id": f"01J{n:023d}",
            "name": f"user_{n}",
            "age": 30,
        }
        data.update(overrides)
        return User(**data)

    return _create


@pytest.fixture
def scripted_repository(scripted_executor: ScriptedExecutor) -> UserRepository:
    """
    UserRepository bound to the scripted executor.

    The executor's expectations are checked by the test itself (call
    `assert_expectations_met()`), since a failing test may legitimately
    stop before every statement arrives.
    """
    return UserRepository(scripted_executor)


@pytest.fixture
def simulator_repository(simulator_executor) -> UserRepository:
    return UserRepository(simulator_executor)


@pytest.fixture
def container_repository(container_executor) -> UserRepository:
    return UserRepository(container_executor)


@pytest.fixture
def live_repository(live_executor) -> UserRepository:
    return UserRepository(live_executor)
