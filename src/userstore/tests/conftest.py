"""
Core pytest configuration for the entire test suite.

This module only installs logging and registers the shared fixtures. The
backends themselves live in:
- tests/test_fixtures/backend_fixtures.py     (mock, simulator, container, live)
- tests/test_fixtures/repository_fixtures.py  (test users, repositories per backend)
- tests/test_fixtures/scripted_executor.py    (the scripted SQLExecutor)

Backend markers:
- `container`: needs Docker; the fixture skips the test when Docker is unreachable
- `live`: needs TEST_DATABASE_URL; the fixture skips the test when it is unset

Select them as usual, e.g. `pytest -m "not container and not live"`.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time (before importing modules that
# might initialize them). Keep this block above the project imports.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "testcontainers",
    "docker",
    "urllib3",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest

# shared scenario helpers assert outside test modules
pytest.register_assert_rewrite("userstore.tests.test_repositories.scenarios")

from userstore.config.settings import Settings  # noqa: E402
from userstore.core.logging.builder import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


# The `autouse=True` part means that this fixture will be automatically used by pytest
# without explicitly including it in your test function parameters.
@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session.

    Console-only text output at DEBUG, so failing tests show the repository's
    log lines. Tests that assert on records use `caplog`, whose handler pytest
    attaches per test phase after this has run.
    """
    setup_logging(Settings(LOG_FORMAT="text", LOG_LEVEL="DEBUG", LOG_TO_STDOUT=True))
    yield


# Backend fixtures
from .test_fixtures.backend_fixtures import (  # noqa: E402
    scripted_executor,
    simulator_executor,
    mysql_container,
    container_executor,
    live_executor,
)

# Repository test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    mike,
    bob,
    user_factory,
    scripted_repository,
    simulator_repository,
    container_repository,
    live_repository,
)
