"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_created(self, user_id: str, organization_id: int) -> None:
        """Record that a user was created inside an organization."""
        ...

    def users_listed(self, count: int, organization_id: int | None) -> None:
        """Record that users were listed."""
        ...

    def user_creation_failed(self, email: str, error: str) -> None:
        """Record that a user could not be created."""
        ...

    def user_updated(self, user_id: str) -> None:
        """Record that a user was updated."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was soft-deleted."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found in the current tenant."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str, organization_id: int) -> None:
        """Record that a user was created inside an organization."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def users_listed(self, count: int, organization_id: int | None) -> None:
        """Record that users were listed."""
        self._logger.debug(
            "users_listed",
            count=count,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def user_creation_failed(self, email: str, error: str) -> None:
        """Record that a user could not be created."""
        self._logger.warning(
            "user_creation_failed",
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str) -> None:
        """Record that a user was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was soft-deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found in the current tenant."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )
