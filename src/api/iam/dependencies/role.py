from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultRoleServiceProbe, RoleServiceProbe
from iam.application.services import RoleService
from iam.infrastructure.role_repository import RoleRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.tenancy import TenantManager, get_tenant_manager


def get_role_service_probe() -> RoleServiceProbe:
    return DefaultRoleServiceProbe()


def get_role_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    tenant_manager: Annotated[TenantManager, Depends(get_tenant_manager)],
) -> RoleRepository:
    return RoleRepository(session=session, tenant_manager=tenant_manager)


def get_role_service(
    role_repo: Annotated[RoleRepository, Depends(get_role_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[RoleServiceProbe, Depends(get_role_service_probe)],
) -> RoleService:
    """Get RoleService instance.

    Returns:
        RoleService instance sharing the request's write session
    """
    return RoleService(role_repository=role_repo, session=session, probe=probe)
