"""Unit tests for Organization HTTP routes.

The service is replaced through FastAPI dependency overrides; only the
HTTP mapping of results and errors is under test here.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import OrganizationService
from iam.dependencies.organization import get_organization_service
from iam.domain.aggregates import Organization
from iam.domain.exceptions import InvalidSlugError
from iam.ports.exceptions import (
    DuplicateOrganizationSlugError,
    OrganizationInUseError,
    OrganizationNotFoundError,
)
from iam.presentation import organizations


@pytest.fixture
def mock_organization_service() -> AsyncMock:
    """Mock OrganizationService for testing."""
    return AsyncMock(spec=OrganizationService)


@pytest.fixture
def acme() -> Organization:
    organization = Organization.create(
        name="Acme", slug="acme", description="Anvils and rockets"
    )
    organization.id = 1
    return organization


@pytest.fixture
def test_client(mock_organization_service: AsyncMock) -> TestClient:
    app = FastAPI()
    app.include_router(organizations.router)
    app.dependency_overrides[get_organization_service] = (
        lambda: mock_organization_service
    )
    return TestClient(app)


class TestCreateOrganization:
    def test_returns_201_with_organization(
        self, test_client, mock_organization_service, acme
    ):
        mock_organization_service.create_organization.return_value = acme

        response = test_client.post(
            "/organizations",
            json={"name": "Acme", "slug": "acme", "description": "Anvils and rockets"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["id"] == 1
        assert body["slug"] == "acme"
        assert body["uuid"] == acme.uuid
        assert body["is_active"] is True
        mock_organization_service.create_organization.assert_awaited_once_with(
            name="Acme",
            slug="acme",
            description="Anvils and rockets",
            is_active=True,
        )

    def test_duplicate_slug_returns_409(self, test_client, mock_organization_service):
        mock_organization_service.create_organization.side_effect = (
            DuplicateOrganizationSlugError("taken")
        )

        response = test_client.post(
            "/organizations", json={"name": "Acme", "slug": "acme"}
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_malformed_slug_returns_422(self, test_client, mock_organization_service):
        response = test_client.post(
            "/organizations", json={"name": "Acme", "slug": "Acme Corp"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_organization_service.create_organization.assert_not_awaited()

    def test_domain_slug_error_returns_422(
        self, test_client, mock_organization_service
    ):
        mock_organization_service.create_organization.side_effect = InvalidSlugError(
            "Invalid slug"
        )

        response = test_client.post(
            "/organizations", json={"name": "Acme", "slug": "acme"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unexpected_error_returns_500(
        self, test_client, mock_organization_service
    ):
        mock_organization_service.create_organization.side_effect = RuntimeError(
            "db down"
        )

        response = test_client.post(
            "/organizations", json={"name": "Acme", "slug": "acme"}
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "db down" not in response.text


class TestListOrganizations:
    def test_passes_query_filters(self, test_client, mock_organization_service, acme):
        mock_organization_service.list_organizations.return_value = [acme]

        response = test_client.get("/organizations?search=ac&active=true")

        assert response.status_code == status.HTTP_200_OK
        assert [o["slug"] for o in response.json()] == ["acme"]
        mock_organization_service.list_organizations.assert_awaited_once_with(
            search="ac", is_active=True
        )

    def test_no_filters(self, test_client, mock_organization_service):
        mock_organization_service.list_organizations.return_value = []

        response = test_client.get("/organizations")

        assert response.json() == []
        mock_organization_service.list_organizations.assert_awaited_once_with(
            search=None, is_active=None
        )


class TestGetOrganization:
    def test_returns_organization(self, test_client, mock_organization_service, acme):
        mock_organization_service.get_organization.return_value = acme

        response = test_client.get("/organizations/1")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Acme"

    def test_missing_returns_404(self, test_client, mock_organization_service):
        mock_organization_service.get_organization.return_value = None

        response = test_client.get("/organizations/9")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdateOrganization:
    def test_partial_update(self, test_client, mock_organization_service, acme):
        acme.update(is_active=False)
        mock_organization_service.update_organization.return_value = acme

        response = test_client.patch("/organizations/1", json={"is_active": False})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_active"] is False
        mock_organization_service.update_organization.assert_awaited_once_with(
            1, name=None, slug=None, description=None, is_active=False
        )

    def test_missing_returns_404(self, test_client, mock_organization_service):
        mock_organization_service.update_organization.side_effect = (
            OrganizationNotFoundError("missing")
        )

        response = test_client.patch("/organizations/9", json={"name": "X"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_slug_conflict_returns_409(self, test_client, mock_organization_service):
        mock_organization_service.update_organization.side_effect = (
            DuplicateOrganizationSlugError("taken")
        )

        response = test_client.patch("/organizations/1", json={"slug": "globex"})

        assert response.status_code == status.HTTP_409_CONFLICT


class TestDeleteOrganization:
    def test_returns_204(self, test_client, mock_organization_service):
        mock_organization_service.delete_organization.return_value = True

        response = test_client.delete("/organizations/1")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""

    def test_missing_returns_404(self, test_client, mock_organization_service):
        mock_organization_service.delete_organization.return_value = False

        response = test_client.delete("/organizations/9")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_owned_records_return_409(self, test_client, mock_organization_service):
        mock_organization_service.delete_organization.side_effect = (
            OrganizationInUseError("in use")
        )

        response = test_client.delete("/organizations/1")

        assert response.status_code == status.HTTP_409_CONFLICT
