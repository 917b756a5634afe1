"""Organization resolver: decides which tenant a unit of work belongs to.

Looks organizations up by subdomain slug or id, caches the outcome (misses
included) for a configurable time, and binds the result in the
``TenantManager`` when an administrator switches tenants.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from contextlib import AbstractAsyncContextManager
from typing import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError

from iam.application.observability import (
    DefaultOrganizationResolverProbe,
    OrganizationResolverProbe,
)
from iam.domain.aggregates import Organization as OrganizationAggregate
from iam.ports.repositories import IOrganizationRepository
from shared_kernel.tenancy import Organization, TenantManager

RepositoryScope = Callable[[], AbstractAsyncContextManager[IOrganizationRepository]]

DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_CACHE_MAX_ENTRIES = 10_000


def strip_port(host: str) -> str:
    """Return ``host`` without a trailing port, lowercased.

    Bracketed IPv6 literals (``[::1]:8000``) lose their brackets.
    """
    host = host.strip().lower()
    if host.startswith("["):
        end = host.find("]")
        return host[1:end] if end != -1 else host[1:]
    if host.count(":") == 1:
        return host.split(":", 1)[0]
    return host


class OrganizationResolver:
    """Resolves organizations for tenant binding.

    Only active organizations are ever returned. Results are cached per
    process under ``tenant.slug.{slug}`` and ``tenant.id.{id}``; a lookup
    that found nothing is cached as well, so repeated requests for an
    unknown subdomain do not hit the database.

    Storage errors never propagate: they are logged and the lookup
    resolves to None.
    """

    def __init__(
        self,
        repository_scope: RepositoryScope,
        tenant_manager: TenantManager,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        probe: OrganizationResolverProbe | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the resolver.

        Args:
            repository_scope: Opens a short-lived organization repository
                (and the session behind it) per lookup
            tenant_manager: Where switched tenants are bound
            cache_ttl_seconds: How long lookups are remembered
            cache_max_entries: Upper bound on remembered lookups; the least
                recently used ones are evicted first
            probe: Optional domain probe for observability
            clock: Monotonic time source
        """
        self._repository_scope = repository_scope
        self._tenant_manager = tenant_manager
        self._ttl = cache_ttl_seconds
        self._probe = probe or DefaultOrganizationResolverProbe()
        self._clock = clock
        self._max_entries = cache_max_entries
        self._cache: OrderedDict[str, tuple[float, Organization | None]] = (
            OrderedDict()
        )

    async def resolve_from_domain(self, host: str) -> Organization | None:
        """Resolve the tenant addressed by a request host.

        ``acme.example.com`` resolves the slug ``acme``. Hosts with fewer
        than three labels (bare or custom domains) resolve to None.
        """
        labels = strip_port(host).split(".")
        if len(labels) < 3 or not labels[0]:
            return None
        return await self.resolve_by_slug(labels[0])

    async def resolve_by_slug(self, slug: str) -> Organization | None:
        async def lookup(repo: IOrganizationRepository):
            return await repo.get_by_slug(slug, active_only=True)

        return await self._remember(self.slug_cache_key(slug), lookup)

    async def resolve_by_id(self, organization_id: int) -> Organization | None:
        async def lookup(repo: IOrganizationRepository):
            return await repo.get_by_id(organization_id, active_only=True)

        return await self._remember(self.id_cache_key(organization_id), lookup)

    async def switch_tenant(self, organization_id: int) -> bool:
        """Bind the organization as the current tenant.

        Returns:
            True if an active organization was found and bound, False
            otherwise (the current binding is left untouched)
        """
        organization = await self.resolve_by_id(organization_id)
        if organization is None:
            self._probe.tenant_switch_rejected(organization_id)
            return False

        self._tenant_manager.set_current_tenant(organization)
        self._probe.tenant_switched(organization_id)
        return True

    def clear_cache(self, organization: Organization | OrganizationAggregate) -> None:
        """Forget cached lookups for an organization (by slug and by id)."""
        slug = (
            organization.slug.value
            if isinstance(organization, OrganizationAggregate)
            else organization.slug
        )
        self._cache.pop(self.slug_cache_key(slug), None)
        if organization.id is not None:
            self._cache.pop(self.id_cache_key(organization.id), None)
            self._probe.cache_cleared(organization.id, slug)

    @staticmethod
    def slug_cache_key(slug: str) -> str:
        return f"tenant.slug.{slug}"

    @staticmethod
    def id_cache_key(organization_id: int) -> str:
        return f"tenant.id.{organization_id}"

    async def _remember(
        self,
        key: str,
        lookup: Callable[
            [IOrganizationRepository], Awaitable[OrganizationAggregate | None]
        ],
    ) -> Organization | None:
        now = self._clock()
        cached = self._cache.get(key)
        if cached is not None and cached[0] > now:
            self._cache.move_to_end(key)
            self._probe.cache_hit(key)
            return cached[1]

        try:
            async with self._repository_scope() as repo:
                aggregate = await lookup(repo)
        except SQLAlchemyError as e:
            # Not cached, the next request retries
            self._probe.lookup_failed(key, str(e))
            return None

        organization = aggregate.to_tenant() if aggregate is not None else None
        self._store(key, organization, now)

        if organization is None:
            self._probe.tenant_not_found(key)
        else:
            self._probe.tenant_resolved(key, organization.id)
        return organization

    def _store(self, key: str, organization: Organization | None, now: float) -> None:
        """Remember a lookup, dropping expired and least recently used entries."""
        self._cache[key] = (now + self._ttl, organization)
        self._cache.move_to_end(key)

        expired = [k for k, (expires_at, _) in self._cache.items() if expires_at <= now]
        for k in expired:
            del self._cache[k]

        evicted = 0
        while len(self._cache) > self._max_entries:
            self._cache.popitem(last=False)
            evicted += 1

        if expired or evicted:
            self._probe.cache_pruned(expired=len(expired), evicted=evicted)

    @property
    def cache_size(self) -> int:
        """Number of lookups currently remembered."""
        return len(self._cache)
