"""Unit test fixtures with mocked dependencies."""

import pytest

from shared_kernel.tenancy import get_tenant_manager


@pytest.fixture(autouse=True)
def clear_tenant_manager_cache():
    """Give every test a fresh process-wide TenantManager."""
    get_tenant_manager.cache_clear()
    yield
    get_tenant_manager.cache_clear()


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )
