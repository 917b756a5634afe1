"""Protocol for role application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RoleServiceProbe(Protocol):
    """Domain probe for role application service operations."""

    def role_created(self, role_id: str, slug: str, organization_id: int) -> None:
        """Record that a role was created inside an organization."""
        ...

    def roles_listed(self, count: int, organization_id: int | None) -> None:
        """Record that roles were listed."""
        ...

    def role_creation_failed(self, slug: str, error: str) -> None:
        """Record that a role could not be created."""
        ...

    def role_updated(self, role_id: str) -> None:
        """Record that a role was updated."""
        ...

    def role_deleted(self, role_id: str) -> None:
        """Record that a role was soft-deleted."""
        ...

    def role_not_found(self, role_id: str) -> None:
        """Record that a role was not found in the current tenant."""
        ...

    def with_context(self, context: ObservationContext) -> RoleServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRoleServiceProbe:
    """Default implementation of RoleServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultRoleServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultRoleServiceProbe(logger=self._logger, context=context)

    def role_created(self, role_id: str, slug: str, organization_id: int) -> None:
        self._logger.info(
            "role_created",
            role_id=role_id,
            slug=slug,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def roles_listed(self, count: int, organization_id: int | None) -> None:
        self._logger.debug(
            "roles_listed",
            count=count,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def role_creation_failed(self, slug: str, error: str) -> None:
        self._logger.warning(
            "role_creation_failed",
            slug=slug,
            error=error,
            **self._get_context_kwargs(),
        )

    def role_updated(self, role_id: str) -> None:
        """Record that a role was updated."""
        self._logger.info(
            "role_updated",
            role_id=role_id,
            **self._get_context_kwargs(),
        )

    def role_deleted(self, role_id: str) -> None:
        """Record that a role was soft-deleted."""
        self._logger.info(
            "role_deleted",
            role_id=role_id,
            **self._get_context_kwargs(),
        )

    def role_not_found(self, role_id: str) -> None:
        """Record that a role was not found in the current tenant."""
        self._logger.debug(
            "role_not_found",
            role_id=role_id,
            **self._get_context_kwargs(),
        )
