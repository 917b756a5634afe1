"""Unit tests for TenantResolverMiddleware and the tenant switch routes.

A small FastAPI app is assembled with SessionMiddleware outermost and the
tenant resolver inside it, the same order the application uses. The
resolver runs against a mocked organization repository.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from iam.application.services import OrganizationResolver
from iam.dependencies.tenancy import get_organization_resolver, get_tenant_manager
from iam.domain.aggregates import Organization
from iam.ports.repositories import IOrganizationRepository
from iam.presentation.middleware import TenantResolverMiddleware
from iam.presentation.observability import TenantResolutionProbe
from iam.presentation.tenant_switch import router as tenant_switch_router
from shared_kernel.tenancy import TenantManager


def _organization(id: int, slug: str) -> Organization:
    organization = Organization.create(name=slug.title(), slug=slug)
    organization.id = id
    return organization


ACME = _organization(1, "acme")
GLOBEX = _organization(2, "globex")


@pytest.fixture
def mock_repository() -> AsyncMock:
    organizations = {o.id: o for o in (ACME, GLOBEX)}
    repo = AsyncMock(spec=IOrganizationRepository)
    repo.get_by_slug.side_effect = lambda slug, active_only=False: next(
        (o for o in organizations.values() if o.slug.value == slug), None
    )
    repo.get_by_id.side_effect = lambda id, active_only=False: organizations.get(id)
    return repo


@pytest.fixture
def tenant_manager() -> TenantManager:
    return TenantManager()


@pytest.fixture
def resolver(mock_repository, tenant_manager) -> OrganizationResolver:
    @asynccontextmanager
    async def scope():
        yield mock_repository

    return OrganizationResolver(repository_scope=scope, tenant_manager=tenant_manager)


@pytest.fixture
def mock_probe() -> Mock:
    return Mock(spec=TenantResolutionProbe)


@pytest.fixture
def client(resolver, tenant_manager, mock_probe) -> TestClient:
    app = FastAPI()

    @app.get("/whoami")
    async def whoami():
        tenant = tenant_manager.get_current_tenant()
        return {
            "tenant": tenant.slug if tenant is not None else None,
            "resolved": tenant_manager.is_resolved(),
        }

    @app.get("/health")
    async def health():
        return {"resolved": tenant_manager.is_resolved()}

    app.include_router(tenant_switch_router)
    app.dependency_overrides[get_organization_resolver] = lambda: resolver
    app.dependency_overrides[get_tenant_manager] = lambda: tenant_manager

    app.add_middleware(
        TenantResolverMiddleware,
        central_domains=("testserver", "localhost"),
        excluded_paths=("/health",),
        resolver_factory=lambda: resolver,
        tenant_manager=tenant_manager,
        probe=mock_probe,
    )
    app.add_middleware(SessionMiddleware, secret_key="test-secret")

    return TestClient(app)


class TestHostResolution:
    def test_subdomain_binds_tenant(self, client):
        response = client.get("/whoami", headers={"host": "acme.example.com"})

        assert response.status_code == 200
        assert response.json() == {"tenant": "acme", "resolved": True}

    def test_port_is_ignored(self, client):
        response = client.get("/whoami", headers={"host": "globex.example.com:8000"})

        assert response.json()["tenant"] == "globex"

    def test_unknown_subdomain_is_404(self, client, mock_probe):
        response = client.get("/whoami", headers={"host": "nobody.example.com"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Tenant not found"}
        mock_probe.tenant_not_found.assert_called_once_with(
            "nobody.example.com", "/whoami"
        )

    def test_central_domain_without_tenant_is_allowed(self, client):
        response = client.get("/whoami", headers={"host": "localhost:8000"})

        assert response.status_code == 200
        assert response.json() == {"tenant": None, "resolved": True}

    def test_excluded_path_skips_resolution(self, client, mock_repository):
        response = client.get("/health", headers={"host": "nobody.example.com"})

        assert response.status_code == 200
        assert response.json() == {"resolved": False}
        mock_repository.get_by_slug.assert_not_awaited()

    def test_binding_does_not_leak_between_requests(self, client, tenant_manager):
        client.get("/whoami", headers={"host": "acme.example.com"})

        assert tenant_manager.get_current_tenant() is None

        response = client.get("/whoami")
        assert response.json()["tenant"] is None


class TestTenantSwitch:
    def test_switch_overrides_host_on_later_requests(self, client):
        response = client.post("/tenants/switch/2")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Switched to tenant successfully",
            "tenant_id": 2,
        }

        response = client.get("/whoami", headers={"host": "acme.example.com"})
        assert response.json()["tenant"] == "globex"

    def test_switch_to_unknown_tenant_is_404(self, client):
        response = client.post("/tenants/switch/99")

        assert response.status_code == 404

        # Nothing was stored in the session
        response = client.get("/whoami", headers={"host": "acme.example.com"})
        assert response.json()["tenant"] == "acme"

    def test_clear_switch_restores_host_resolution(self, client):
        client.post("/tenants/switch/2")

        response = client.delete("/tenants/switch")
        assert response.status_code == 200

        response = client.get("/whoami", headers={"host": "acme.example.com"})
        assert response.json()["tenant"] == "acme"

    def test_current_reports_switched_tenant(self, client):
        client.post("/tenants/switch/1")

        response = client.get("/tenants/current")

        assert response.json() == {
            "tenant": {"id": 1, "name": "Acme", "slug": "acme"},
            "resolved": True,
        }

    def test_stale_switch_resolves_to_nothing(self, client, mock_repository, resolver):
        client.post("/tenants/switch/2")

        # Organization deactivated after the switch
        mock_repository.get_by_id.side_effect = lambda id, active_only=False: None
        resolver.clear_cache(GLOBEX)

        response = client.get("/whoami", headers={"host": "acme.example.com"})

        assert response.status_code == 200
        assert response.json() == {"tenant": None, "resolved": True}


class TestIsCentralDomain:
    @pytest.mark.parametrize(
        "host, expected",
        [
            ("localhost", True),
            ("LOCALHOST:8000", True),
            ("testserver", True),
            ("acme.example.com", False),
        ],
    )
    def test_matches_configured_domains(self, host, expected):
        middleware = TenantResolverMiddleware(
            app=Mock(),
            central_domains=("localhost", "testserver"),
            resolver_factory=Mock(),
            tenant_manager=TenantManager(),
        )

        assert middleware.is_central_domain(host) is expected
