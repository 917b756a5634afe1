"""Unit tests for main FastAPI application wiring."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from starlette.middleware.sessions import SessionMiddleware

from iam.presentation import TenantResolverMiddleware
from infrastructure.database.dependencies import get_read_session


@pytest.fixture
def app():
    from main import app

    yield app
    app.dependency_overrides.clear()


class TestMiddlewareOrder:
    def test_session_wraps_tenant_resolver(self, app):
        """The session must be loaded before the resolver reads the switch."""
        classes = [m.cls for m in app.user_middleware]

        assert classes.index(SessionMiddleware) < classes.index(
            TenantResolverMiddleware
        )


class TestRoutes:
    def test_registers_context_routes(self, app):
        paths = {route.path for route in app.routes}

        assert "/organizations" in paths
        assert "/organizations/{organization_id}" in paths
        assert "/users" in paths
        assert "/roles" in paths
        assert "/tenants/switch/{tenant_id}" in paths
        assert "/tenants/current" in paths
        assert "/dashboard/stats" in paths


class TestHealth:
    def test_health_skips_tenant_resolution(self, app):
        client = TestClient(app)

        response = client.get("/health", headers={"host": "unknown.example.com"})

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_db_health_reports_failure(self, app):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        async def broken_session():
            yield session

        app.dependency_overrides[get_read_session] = broken_session
        client = TestClient(app)

        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json()["connected"] is False
        assert response.json()["status"] == "error"
