"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance with the schema
migrated (``alembic upgrade head``). Use docker-compose for testing.
"""

import os

import pytest
from pydantic import SecretStr

from infrastructure.settings import DatabaseSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        ORGADMIN_DB_HOST, ORGADMIN_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("ORGADMIN_DB_HOST", "localhost"),
        port=int(os.getenv("ORGADMIN_DB_PORT", "5432")),
        database=os.getenv("ORGADMIN_DB_DATABASE", "orgadmin"),
        username=os.getenv("ORGADMIN_DB_USERNAME", "orgadmin"),
        password=SecretStr(os.getenv("ORGADMIN_DB_PASSWORD", "orgadmin_dev_password")),
    )
