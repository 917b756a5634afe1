from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.application.services import UserService
from iam.dependencies.role import get_role_repository
from iam.infrastructure.role_repository import RoleRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.tenancy import TenantManager, get_tenant_manager


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    tenant_manager: Annotated[TenantManager, Depends(get_tenant_manager)],
) -> UserRepository:
    """Get UserRepository instance scoped by the process tenant manager.

    Args:
        session: Async database session
        tenant_manager: Source of the current tenant

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session, tenant_manager=tenant_manager)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        role_repo: Role repository for role assignment
        session: Database session for transaction management
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(
        user_repository=user_repo,
        role_repository=role_repo,
        session=session,
        probe=probe,
    )
