"""Unit tests for the tenant helper functions."""

from __future__ import annotations

import asyncio

import pytest

from shared_kernel.tenancy import (
    Organization,
    get_tenant_manager,
    tenant,
    tenant_id,
    tenant_manager,
)

ACME = Organization(id=7, name="Acme", slug="acme")


class TestHelpers:
    """The helpers read the process tenant manager's current binding."""

    def test_tenant_manager_returns_process_manager(self):
        assert tenant_manager() is get_tenant_manager()

    def test_helpers_return_none_when_unbound(self):
        assert tenant() is None
        assert tenant_id() is None

    def test_helpers_agree_with_manager(self):
        with get_tenant_manager().bind(ACME):
            assert tenant() == ACME
            assert tenant_id() == 7
            assert tenant_id() == tenant().id

    @pytest.mark.asyncio
    async def test_helpers_read_callers_context(self):
        async def read_in(organization: Organization) -> int | None:
            with tenant_manager().bind(organization):
                await asyncio.sleep(0)
                return tenant_id()

        other = Organization(id=8, name="Other", slug="other")
        results = await asyncio.gather(read_in(ACME), read_in(other))

        assert results == [7, 8]


class TestOrganizationSnapshot:
    def test_str_uses_slug(self):
        assert str(ACME) == "Organization(acme)"

    def test_is_active_by_default(self):
        assert ACME.is_active is True
