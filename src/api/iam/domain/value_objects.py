"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ulid import ULID

from iam.domain.exceptions import InvalidSlugError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class RoleId:
    """Identifier for a Role aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> RoleId:
        """Generate a new RoleId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> RoleId:
        """Create RoleId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid RoleId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class Slug:
    """URL-safe handle: lowercase alphanumerics separated by single hyphens.

    Organization slugs double as tenant subdomains, so they must be valid
    DNS labels.
    """

    value: str

    def __post_init__(self) -> None:
        if len(self.value) > 255 or not SLUG_PATTERN.fullmatch(self.value):
            raise InvalidSlugError(f"Invalid slug: '{self.value}'")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value
