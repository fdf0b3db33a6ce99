"""API Dependencies — FastAPI providers for the presentation service and requesting contributor.

Invariants:
    - One service (and repository) per request, bound to that request's AsyncSession
    - The requesting contributor is read from gateway headers and trusted as-is
    - Missing identity is None for optional callers, ContributorRequiredError otherwise
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import ContributorId
from app.core.errors import ContributorRequiredError
from app.core.presentation import SimpleContributor
from app.infrastructure.database import get_db
from app.infrastructure.presentation_repository import SqlProjectPresentationRepository
from app.services.presentation_service import ProjectsPresentationService


def get_presentation_service(
    db: AsyncSession = Depends(get_db),
) -> ProjectsPresentationService:
    return ProjectsPresentationService(SqlProjectPresentationRepository(db))


def get_requesting_contributor(request: Request) -> SimpleContributor | None:
    """Build the requesting contributor from identity headers, if present."""
    settings = get_settings()
    contributor_id = request.headers.get(settings.contributor_id_header, "").strip()
    if not contributor_id:
        return None
    raw_roles = request.headers.get(settings.contributor_roles_header, "")
    roles = frozenset(r.strip() for r in raw_roles.split(",") if r.strip())
    return SimpleContributor(ContributorId(contributor_id), roles)


def require_requesting_contributor(
    contributor: SimpleContributor | None = Depends(get_requesting_contributor),
) -> SimpleContributor:
    if contributor is None:
        raise ContributorRequiredError(get_settings().contributor_id_header)
    return contributor
