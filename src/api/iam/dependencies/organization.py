from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from iam.application.services import OrganizationResolver, OrganizationService
from iam.dependencies.tenancy import get_organization_resolver
from iam.infrastructure.organization_repository import OrganizationRepository
from infrastructure.database.dependencies import get_write_session


def get_organization_service_probe() -> OrganizationServiceProbe:
    """Get OrganizationServiceProbe instance.

    Returns:
        DefaultOrganizationServiceProbe instance for observability
    """
    return DefaultOrganizationServiceProbe()


def get_organization_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> OrganizationRepository:
    """Get OrganizationRepository instance.

    Args:
        session: Async database session

    Returns:
        OrganizationRepository instance
    """
    return OrganizationRepository(session=session)


def get_organization_service(
    organization_repo: Annotated[
        OrganizationRepository, Depends(get_organization_repository)
    ],
    resolver: Annotated[OrganizationResolver, Depends(get_organization_resolver)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[
        OrganizationServiceProbe, Depends(get_organization_service_probe)
    ],
) -> OrganizationService:
    """Get OrganizationService instance.

    Args:
        organization_repo: Organization repository (shares session via
            FastAPI dependency caching)
        resolver: Process-wide resolver whose cache is kept in sync
        session: Database session for transaction management
        probe: Organization service probe for observability

    Returns:
        OrganizationService instance
    """
    return OrganizationService(
        organization_repository=organization_repo,
        resolver=resolver,
        session=session,
        probe=probe,
    )
