"""Context-scoped tracking of the current tenant.

The TenantManager answers "which organization is active right now" for any
code running inside one unit of work (an HTTP request, a background task)
without that code having to thread the tenant through every call.

Bindings live in one module-level ``ContextVar`` holding an immutable
mapping of manager to binding, so every asyncio task and every thread sees
its own value and constructing a manager allocates no context variable.
A process owns exactly one manager, provided by ``get_tenant_manager()``
and injected wherever a unit of work is set up.

Usage:
    manager = get_tenant_manager()

    with manager.bind():
        manager.set_current_tenant(organization)
        ...
    # binding released here, even if the block raised
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token, copy_context
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import ParamSpec, TypeVar

from shared_kernel.tenancy.observability import (
    DefaultTenantManagerProbe,
    TenantManagerProbe,
)
from shared_kernel.tenancy.organization import Organization

P = ParamSpec("P")
R = TypeVar("R")


@dataclass(frozen=True)
class TenantBinding:
    """Immutable state of the current-tenant context.

    Attributes:
        organization: The bound organization, or None.
        resolved: Whether resolution was attempted in this unit of work.
            ``resolved=True`` with no organization means "resolved to nothing"
            (e.g. a platform-level request on a central domain).
    """

    organization: Organization | None = None
    resolved: bool = False


_UNBOUND = TenantBinding()

_current_tenants: ContextVar[Mapping[TenantManager, TenantBinding]] = ContextVar(
    "current_tenants", default=MappingProxyType({})
)


class TenantManager:
    """Tracks the current tenant of the executing unit of work.

    Two states: ``Unbound`` (initial) and ``Bound(organization)``.
    ``set_current_tenant`` binds or rebinds, ``clear_tenant`` and the end of
    a ``bind()`` scope unbind. Reads never raise; absence is a normal state.
    """

    def __init__(self, probe: TenantManagerProbe | None = None) -> None:
        self._probe = probe or DefaultTenantManagerProbe()

    def _get_binding(self) -> TenantBinding:
        return _current_tenants.get().get(self, _UNBOUND)

    def _set_binding(self, binding: TenantBinding) -> Token:
        bindings = dict(_current_tenants.get())
        bindings[self] = binding
        return _current_tenants.set(MappingProxyType(bindings))

    def get_current_tenant(self) -> Organization | None:
        """Return the organization bound to the current unit of work, or None."""
        return self._get_binding().organization

    def get_current_tenant_id(self) -> int | None:
        """Return the id of the current organization, or None."""
        organization = self._get_binding().organization
        return organization.id if organization is not None else None

    def set_current_tenant(self, organization: Organization | None) -> None:
        """Bind an organization (or explicitly none) to the current unit of work."""
        self._set_binding(TenantBinding(organization=organization, resolved=True))
        self._probe.tenant_bound(organization.id if organization else None)

    def has_tenant(self) -> bool:
        """Return True if an organization is bound."""
        return self._get_binding().organization is not None

    def is_resolved(self) -> bool:
        """Return True if tenant resolution was attempted and not cleared since."""
        return self._get_binding().resolved

    def clear_tenant(self) -> None:
        """Return the current unit of work to the unbound state."""
        self._set_binding(_UNBOUND)
        self._probe.tenant_cleared()

    @contextmanager
    def bind(self, organization: Organization | None = None) -> Iterator[None]:
        """Scope a unit of work.

        On entry the context is bound to ``organization`` (or left unbound when
        None). On exit the binding that was active before entry is restored
        unconditionally, so nothing set inside the scope survives it.

        Args:
            organization: Tenant to bind for the duration of the scope.
        """
        if organization is None:
            token = self._set_binding(_UNBOUND)
        else:
            token = self._set_binding(
                TenantBinding(organization=organization, resolved=True)
            )
        try:
            yield
        finally:
            released = self.get_current_tenant_id()
            _current_tenants.reset(token)
            self._probe.tenant_context_released(released)

    def run_in_tenant(
        self,
        organization: Organization | None,
        func: Callable[P, R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Run ``func`` in a copy of the current context with a tenant bound.

        The caller's own binding is never touched, which makes this suitable
        for handing work to thread pools and background jobs.
        """

        def _run() -> R:
            with self.bind(organization):
                return func(*args, **kwargs)

        return copy_context().run(_run)


@lru_cache
def get_tenant_manager() -> TenantManager:
    """Get the application-scoped TenantManager (singleton).

    Uses lru_cache so the manager is constructed once per process.
    """
    return TenantManager()
