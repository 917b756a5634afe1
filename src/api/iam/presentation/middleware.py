"""Tenant resolver middleware.

Binds the tenant of every HTTP request in the process ``TenantManager``.
Written as a pure ASGI middleware (not ``BaseHTTPMiddleware``) so the
binding is made in the same context the endpoint runs in and is visible to
everything downstream.

Must be installed inside ``SessionMiddleware``: the administrator's tenant
switch is read from ``scope["session"]``.
"""

from __future__ import annotations

from typing import Callable, Iterable

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from iam.application.services import OrganizationResolver
from iam.application.services.organization_resolver import strip_port
from iam.dependencies.tenancy import get_organization_resolver
from iam.presentation.observability import (
    DefaultTenantResolutionProbe,
    TenantResolutionProbe,
)
from shared_kernel.tenancy import TenantManager, get_tenant_manager

SWITCHED_TENANT_SESSION_KEY = "switched_tenant_id"


class TenantResolverMiddleware:
    """Resolves and binds the current tenant, one unit of work per request.

    Resolution order:
    1. Excluded paths (health checks) are served without a tenant.
    2. A tenant switched to by an administrator (kept in the session).
    3. The subdomain of the request host.

    Requests on a non-central host that resolve no tenant get a 404.
    """

    def __init__(
        self,
        app: ASGIApp,
        central_domains: Iterable[str] = ("localhost", "127.0.0.1", "::1"),
        excluded_paths: Iterable[str] = ("/health",),
        resolver_factory: Callable[
            [], OrganizationResolver
        ] = get_organization_resolver,
        tenant_manager: TenantManager | None = None,
        probe: TenantResolutionProbe | None = None,
    ) -> None:
        self.app = app
        self._central_domains = frozenset(d.lower() for d in central_domains)
        self._excluded_paths = tuple(excluded_paths)
        self._resolver_factory = resolver_factory
        self._tenant_manager = tenant_manager or get_tenant_manager()
        self._probe = probe or DefaultTenantResolutionProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path: str = scope["path"]

        # Every request starts unbound and is reset when it ends
        with self._tenant_manager.bind():
            if self._is_excluded(path):
                await self.app(scope, receive, send)
                return

            resolver = self._resolver_factory()
            session = scope.get("session")
            if session is not None and SWITCHED_TENANT_SESSION_KEY in session:
                await self._apply_switched_tenant(resolver, session, path)
                await self.app(scope, receive, send)
                return

            host = Headers(scope=scope).get("host", "")
            organization = await resolver.resolve_from_domain(host)
            self._tenant_manager.set_current_tenant(organization)
            self._probe.tenant_resolved_from_host(
                organization.id if organization is not None else None, host, path
            )

            if organization is None and not self.is_central_domain(host):
                self._probe.tenant_not_found(host, path)
                response = JSONResponse(
                    {"detail": "Tenant not found"}, status_code=404
                )
                await response(scope, receive, send)
                return

            await self.app(scope, receive, send)

    def is_central_domain(self, host: str) -> bool:
        return strip_port(host) in self._central_domains

    def _is_excluded(self, path: str) -> bool:
        return any(
            path == excluded or path.startswith(excluded.rstrip("/") + "/")
            for excluded in self._excluded_paths
        )

    async def _apply_switched_tenant(
        self, resolver: OrganizationResolver, session: dict, path: str
    ) -> None:
        raw_value = session[SWITCHED_TENANT_SESSION_KEY]
        try:
            organization_id = int(raw_value)
        except (TypeError, ValueError):
            self._probe.invalid_switched_tenant(str(raw_value))
            session.pop(SWITCHED_TENANT_SESSION_KEY, None)
            self._tenant_manager.set_current_tenant(None)
            return

        if await resolver.switch_tenant(organization_id):
            self._probe.tenant_resolved_from_session(organization_id, path)
        else:
            # Deactivated or deleted since the switch
            self._tenant_manager.set_current_tenant(None)
