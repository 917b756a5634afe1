"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.base import TenantOwnedMixin
from iam.infrastructure.models.organization import OrganizationModel
from iam.infrastructure.models.role import RoleModel
from iam.infrastructure.models.role_user import role_user_table
from iam.infrastructure.models.user import UserModel

__all__ = [
    "OrganizationModel",
    "RoleModel",
    "role_user_table",
    "TenantOwnedMixin",
    "UserModel",
]
