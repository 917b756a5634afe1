"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application or presentation layer.
"""


class DuplicateOrganizationSlugError(Exception):
    """Raised when attempting to store an organization whose slug is taken.

    Slugs double as tenant subdomains, so they must be globally unique.
    """

    pass


class DuplicateUserEmailError(Exception):
    """Raised when attempting to create a user with an email that already exists."""

    pass


class DuplicateRoleSlugError(Exception):
    """Raised when a role slug already exists inside the same organization."""

    pass


class OrganizationNotFoundError(Exception):
    """Raised when an organization cannot be found.

    Raised when attempting to update or delete an organization that does
    not exist.
    """

    pass


class MissingTenantError(Exception):
    """Raised when a tenant-owned record is created without an organization.

    Happens when no ``organization_id`` is given explicitly and no tenant
    is bound to the current unit of work.
    """

    pass


class OrganizationInUseError(Exception):
    """Raised when deleting an organization that still owns users or roles."""

    pass


class CrossTenantAccessError(Exception):
    """Raised when a unit of work bound to one tenant addresses another.

    With a tenant bound, reads and writes may only target that tenant's
    organization. Only platform-level access (no tenant bound) may name
    any organization.
    """

    pass


class UserNotFoundError(Exception):
    """Raised when a user cannot be found in the current tenant."""

    pass


class RoleNotFoundError(Exception):
    """Raised when a role cannot be found in the current tenant."""

    pass
