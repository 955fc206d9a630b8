"""Pytest fixtures for the driver layer."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from dbconnect.config import Config
from dbconnect.driver.postgres import PostgresConnection, PostgresDriver


@pytest.fixture(autouse=True)
def _reset_config() -> Iterator[None]:
    """Drop the cached Config so each test reads its own environment."""

    Config.reset()
    yield
    Config.reset()


@pytest.fixture()
def logger() -> logging.Logger:
    """Return a quiet logger for drivers under test."""

    test_logger = logging.getLogger("dbconnect.tests")
    test_logger.addHandler(logging.NullHandler())
    return test_logger


@pytest.fixture()
def database_url() -> str:
    """Return PostgreSQL URL for integration tests.

    Tests require `DATABASE_URL` or sufficient `DB_*` variables.
    """

    from dbconnect.config import get_config

    url = get_config().database_url
    if not url:
        pytest.skip("DATABASE_URL/DB_* is not configured")
    return url


@pytest.fixture()
def pg_conn(database_url: str, logger: logging.Logger) -> Iterator[PostgresConnection]:
    """Open a live PostgreSQL connection and close it afterwards."""

    conn = PostgresDriver(logger=logger).connect(database_url)
    try:
        yield conn
    finally:
        conn.close()
