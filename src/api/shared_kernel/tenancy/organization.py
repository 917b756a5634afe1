"""Organization snapshot carried in the current-tenant context.

This is the pure value object bound to a unit of work. It is framework-agnostic
and contains no persistence logic, making it safe for the shared kernel.
The Organization aggregate and its storage live in the IAM bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Organization:
    """Resolved tenant for the current unit of work.

    Attributes:
        id: Database identifier of the organization.
        name: Display name.
        slug: URL-safe unique handle, used as the tenant subdomain.
        is_active: Whether the organization may be resolved as a tenant.
    """

    id: int
    name: str
    slug: str
    is_active: bool = True

    def __str__(self) -> str:
        """Return string representation."""
        return f"Organization({self.slug})"
