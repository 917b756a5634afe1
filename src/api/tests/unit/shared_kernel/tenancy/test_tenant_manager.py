"""Unit tests for TenantManager.

Covers the current-tenant state machine and per-unit-of-work isolation
across asyncio tasks and threads.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from unittest.mock import Mock

import pytest

from shared_kernel.tenancy import (
    Organization,
    TenantManager,
    get_tenant_manager,
)
from shared_kernel.tenancy.observability import TenantManagerProbe

ACME = Organization(id=1, name="Acme", slug="acme")
GLOBEX = Organization(id=2, name="Globex", slug="globex")


@pytest.fixture
def probe() -> Mock:
    return Mock(spec=TenantManagerProbe)


@pytest.fixture
def manager(probe: Mock) -> TenantManager:
    return TenantManager(probe=probe)


class TestUnboundState:
    """Tests for reads outside any binding."""

    def test_current_tenant_is_none(self, manager):
        assert manager.get_current_tenant() is None

    def test_current_tenant_id_is_none(self, manager):
        assert manager.get_current_tenant_id() is None

    def test_has_no_tenant_and_is_not_resolved(self, manager):
        assert manager.has_tenant() is False
        assert manager.is_resolved() is False


class TestSetCurrentTenant:
    """Tests for binding and rebinding."""

    def test_binds_organization(self, manager):
        with manager.bind():
            manager.set_current_tenant(ACME)

            assert manager.get_current_tenant() == ACME
            assert manager.get_current_tenant_id() == 1
            assert manager.has_tenant() is True
            assert manager.is_resolved() is True

    def test_rebinding_replaces_tenant(self, manager):
        with manager.bind():
            manager.set_current_tenant(ACME)
            manager.set_current_tenant(GLOBEX)

            assert manager.get_current_tenant() == GLOBEX
            assert manager.get_current_tenant_id() == 2

    def test_setting_same_tenant_twice_is_idempotent(self, manager):
        with manager.bind():
            manager.set_current_tenant(ACME)
            manager.set_current_tenant(ACME)

            assert manager.get_current_tenant() == ACME

    def test_binding_none_marks_resolved_without_tenant(self, manager):
        """Resolving to nothing (e.g. localhost) is distinct from not resolving."""
        with manager.bind():
            manager.set_current_tenant(None)

            assert manager.get_current_tenant() is None
            assert manager.has_tenant() is False
            assert manager.is_resolved() is True

    def test_emits_probe_event(self, manager, probe):
        with manager.bind():
            manager.set_current_tenant(ACME)

        probe.tenant_bound.assert_called_once_with(1)

    def test_bound_organization_cannot_be_mutated(self, manager):
        with manager.bind():
            manager.set_current_tenant(ACME)
            tenant = manager.get_current_tenant()

            with pytest.raises(AttributeError):
                tenant.id = 99  # type: ignore[misc]


class TestClearTenant:
    """Tests for clear_tenant."""

    def test_returns_to_unbound(self, manager, probe):
        with manager.bind():
            manager.set_current_tenant(ACME)
            manager.clear_tenant()

            assert manager.get_current_tenant() is None
            assert manager.is_resolved() is False
            probe.tenant_cleared.assert_called_once()


class TestBindScope:
    """Tests for the unit-of-work scope."""

    def test_binds_given_organization_on_entry(self, manager):
        with manager.bind(ACME):
            assert manager.get_current_tenant() == ACME

        assert manager.get_current_tenant() is None

    def test_scope_starts_unbound_even_inside_a_bound_scope(self, manager):
        with manager.bind(ACME):
            with manager.bind():
                assert manager.get_current_tenant() is None
            assert manager.get_current_tenant() == ACME

    def test_binding_set_inside_scope_is_released(self, manager, probe):
        with manager.bind():
            manager.set_current_tenant(GLOBEX)

        assert manager.get_current_tenant() is None
        probe.tenant_context_released.assert_called_once_with(2)

    def test_binding_released_when_scope_raises(self, manager):
        with pytest.raises(RuntimeError):
            with manager.bind():
                manager.set_current_tenant(ACME)
                raise RuntimeError("boom")

        assert manager.get_current_tenant() is None
        assert manager.is_resolved() is False


class TestIsolation:
    """Concurrent units of work never observe each other's tenant."""

    @pytest.mark.asyncio
    async def test_concurrent_tasks_are_isolated(self, manager):
        async def unit_of_work(organization: Organization) -> list[int | None]:
            seen = []
            with manager.bind():
                manager.set_current_tenant(organization)
                for _ in range(5):
                    await asyncio.sleep(0)
                    seen.append(manager.get_current_tenant_id())
            return seen

        acme_seen, globex_seen = await asyncio.gather(
            unit_of_work(ACME), unit_of_work(GLOBEX)
        )

        assert acme_seen == [1] * 5
        assert globex_seen == [2] * 5
        assert manager.get_current_tenant() is None

    def test_threads_are_isolated(self, manager):
        barrier = threading.Barrier(2)

        def unit_of_work(organization: Organization) -> int | None:
            with manager.bind():
                manager.set_current_tenant(organization)
                barrier.wait()
                return manager.get_current_tenant_id()

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(unit_of_work, [ACME, GLOBEX]))

        assert results == [1, 2]

    def test_pooled_thread_does_not_leak_previous_tenant(self, manager):
        """A reused worker starts unbound after the previous unit of work."""

        def first() -> None:
            with manager.bind():
                manager.set_current_tenant(ACME)

        def second() -> int | None:
            return manager.get_current_tenant_id()

        with ThreadPoolExecutor(max_workers=1) as pool:
            pool.submit(first).result()
            assert pool.submit(second).result() is None

    def test_separate_managers_do_not_share_state(self):
        first = TenantManager()
        second = TenantManager()

        with first.bind(ACME):
            assert second.get_current_tenant() is None

    def test_managers_share_one_context_variable(self):
        managers = [TenantManager() for _ in range(50)]

        def bind_all() -> int:
            for manager in managers:
                manager.set_current_tenant(ACME)
            assert all(m.get_current_tenant_id() == 1 for m in managers)
            return len(
                [var for var in copy_context() if var.name == "current_tenants"]
            )

        assert copy_context().run(bind_all) == 1


class TestRunInTenant:
    """Tests for run_in_tenant."""

    def test_runs_with_tenant_bound(self, manager):
        result = manager.run_in_tenant(GLOBEX, manager.get_current_tenant_id)

        assert result == 2

    def test_leaves_caller_binding_untouched(self, manager):
        with manager.bind(ACME):
            manager.run_in_tenant(GLOBEX, manager.set_current_tenant, None)

            assert manager.get_current_tenant() == ACME

    def test_passes_arguments(self, manager):
        def describe(prefix: str, suffix: str = "") -> str:
            tenant = manager.get_current_tenant()
            return f"{prefix}{tenant.slug}{suffix}"

        assert manager.run_in_tenant(ACME, describe, "<", suffix=">") == "<acme>"


class TestGetTenantManager:
    def test_is_a_process_singleton(self):
        assert get_tenant_manager() is get_tenant_manager()
