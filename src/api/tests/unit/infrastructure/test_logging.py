"""Unit tests for structlog configuration and tenant stamping."""

import json

import pytest
import structlog

from infrastructure.logging import add_tenant_context, configure_logging
from shared_kernel.tenancy import Organization, TenantManager

ACME = Organization(id=4, name="Acme", slug="acme")


@pytest.fixture
def manager() -> TenantManager:
    return TenantManager()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestAddTenantContext:
    def test_stamps_bound_tenant(self, manager):
        processor = add_tenant_context(manager)

        with manager.bind(ACME):
            event = processor(None, "info", {"event": "user_saved"})

        assert event["tenant_id"] == 4
        assert event["tenant_slug"] == "acme"

    def test_leaves_unbound_events_alone(self, manager):
        processor = add_tenant_context(manager)

        assert processor(None, "info", {"event": "app_started"}) == {
            "event": "app_started"
        }

    def test_explicit_tenant_id_wins(self, manager):
        processor = add_tenant_context(manager)

        with manager.bind(ACME):
            event = processor(None, "info", {"event": "switch", "tenant_id": 9})

        assert event["tenant_id"] == 9


class TestConfigureLogging:
    def test_json_output_carries_tenant(
        self, manager, monkeypatch, capsys, reset_structlog
    ):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        configure_logging(tenant_manager=manager)

        with manager.bind(ACME):
            structlog.get_logger().info("role_assigned", user_id="01USER")

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["event"] == "role_assigned"
        assert line["tenant_id"] == 4
        assert line["tenant_slug"] == "acme"
        assert line["level"] == "info"

    def test_debug_events_filtered_unless_enabled(
        self, manager, monkeypatch, capsys, reset_structlog
    ):
        monkeypatch.delenv("FORCE_COLOR", raising=False)

        configure_logging(tenant_manager=manager)
        structlog.get_logger().debug("tenant_cache_hit")
        assert capsys.readouterr().out == ""

        configure_logging(debug=True, tenant_manager=manager)
        structlog.get_logger().debug("tenant_cache_hit")
        assert "tenant_cache_hit" in capsys.readouterr().out
