"""User aggregate for IAM context."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a person inside one organization.

    ``organization_id`` may be None on a freshly created user; it is
    filled from the current tenant when the user is persisted.
    ``role_slugs`` holds the slugs of the roles the user currently holds.
    """

    id: UserId
    name: str
    email: str
    organization_id: int | None = None
    role_slugs: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def create(
        cls, name: str, email: str, organization_id: int | None = None
    ) -> User:
        """Factory method for creating a new user."""
        return cls(
            id=UserId.generate(),
            name=name,
            email=email.lower(),
            organization_id=organization_id,
        )

    def update(self, name: str | None = None, email: str | None = None) -> User:
        """Return a copy with the given fields changed.

        Arguments left as None are unchanged. Emails are stored lowercased.
        """
        return replace(
            self,
            name=name if name is not None else self.name,
            email=email.lower() if email is not None else self.email,
        )

    def has_role(self, slug: str) -> bool:
        return slug in self.role_slugs

    def has_any_role(self, slugs: Iterable[str]) -> bool:
        return any(slug in self.role_slugs for slug in slugs)

    def has_all_roles(self, slugs: Iterable[str]) -> bool:
        return all(slug in self.role_slugs for slug in slugs)

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
