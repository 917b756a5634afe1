"""Unit tests for IAM repository domain probes."""

from unittest.mock import Mock

from iam.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    DefaultTenantOwnedRepositoryProbe,
)
from shared_kernel.observability_context import ObservationContext


class TestDefaultOrganizationRepositoryProbe:
    def test_creates_with_default_logger(self):
        """Test that probe can be created without providing a logger."""
        probe = DefaultOrganizationRepositoryProbe()
        assert probe._logger is not None

    def test_organization_saved_logs_info(self):
        mock_logger = Mock()
        probe = DefaultOrganizationRepositoryProbe(logger=mock_logger)

        probe.organization_saved(organization_id=3, slug="acme")

        mock_logger.info.assert_called_once_with(
            "organization_saved", organization_id=3, slug="acme"
        )

    def test_duplicate_slug_logs_warning(self):
        mock_logger = Mock()
        probe = DefaultOrganizationRepositoryProbe(logger=mock_logger)

        probe.duplicate_organization_slug("acme")

        mock_logger.warning.assert_called_once_with(
            "duplicate_organization_slug", slug="acme"
        )

    def test_with_context_adds_metadata(self):
        mock_logger = Mock()
        probe = DefaultOrganizationRepositoryProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.organization_deleted(3)

        call_kwargs = mock_logger.info.call_args[1]
        assert call_kwargs["request_id"] == "req-1"
        assert call_kwargs["organization_id"] == 3


class TestDefaultTenantOwnedRepositoryProbe:
    def test_record_saved_uses_kind_in_event_name(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.record_saved("role", record_id="01ABC", organization_id=4)

        call_args = mock_logger.info.call_args
        assert call_args[0][0] == "role_saved"
        assert call_args[1]["organization_id"] == 4

    def test_tenant_assigned_logs_debug(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.tenant_assigned("user", record_id="01ABC", organization_id=4)

        mock_logger.debug.assert_called_once()
        assert mock_logger.debug.call_args[1]["kind"] == "user"

    def test_missing_tenant_logs_warning(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.missing_tenant("user")

        mock_logger.warning.assert_called_once_with(
            "tenant_missing_on_create", kind="user"
        )

    def test_duplicate_record_logs_key(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.duplicate_record("user", "alice@example.com")

        mock_logger.warning.assert_called_once_with(
            "duplicate_user", key="alice@example.com"
        )

    def test_record_deleted_uses_kind_in_event_name(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.record_deleted("user", record_id="01ABC", organization_id=4)

        mock_logger.info.assert_called_once_with(
            "user_deleted", record_id="01ABC", organization_id=4
        )

    def test_cross_tenant_access_logs_both_organizations(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.cross_tenant_access_denied("user", 9, 4)

        mock_logger.warning.assert_called_once_with(
            "cross_tenant_access_denied",
            kind="user",
            organization_id=9,
            current_tenant_id=4,
        )

    def test_role_assignment_events(self):
        mock_logger = Mock()
        probe = DefaultTenantOwnedRepositoryProbe(logger=mock_logger)

        probe.role_assigned("01USER", "01ROLE")
        probe.role_removed("01USER", "01ROLE")

        assert [c[0][0] for c in mock_logger.info.call_args_list] == [
            "role_assigned",
            "role_removed",
        ]
