"""Project Presentation Routes — thin REST adapter over ProjectsPresentationService.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - A None service result maps to 404 (malformed id, missing, or not a contributor)
    - List query params accept repeated keys or comma-separated values

Design Decisions:
    - Handlers only translate: wire -> core values -> service -> response schema
    - List endpoint drains the service stream into one JSON document
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import (
    get_presentation_service,
    get_requesting_contributor,
    require_requesting_contributor,
)
from app.core.errors import ErrorContext, ResourceNotFoundError
from app.core.presentation import ListProjectPresentationsFilter, SimpleContributor
from app.schemas.presentation import (
    ProjectPresentationCreate,
    ProjectPresentationListResponse,
    ProjectPresentationResponse,
    ProjectPresentationUpdate,
)
from app.services.presentation_service import ProjectsPresentationService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/projects-presentation", tags=["projects-presentation"],
)


def _split_csv(values: list[str] | None) -> list[str] | None:
    """Flatten ?a=1,2&a=3 into ["1", "2", "3"]; no values means no constraint."""
    if not values:
        return None
    items = [item.strip() for value in values for item in value.split(",")]
    return [item for item in items if item] or None


def _not_found(
    presentation_id: str, contributor: SimpleContributor | None = None,
) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "ProjectPresentation", presentation_id,
        ErrorContext(
            presentation_id=presentation_id,
            contributor_id=contributor.contributor_id if contributor else None,
        ),
    )


@router.get("", response_model=ProjectPresentationListResponse)
async def list_project_presentations(
    project_id: str | None = Query(None, alias="projectId"),
    project_ids: list[str] | None = Query(None, alias="projectIds"),
    contributor_ids: list[str] | None = Query(None, alias="contributorIds"),
    ids: list[str] | None = Query(None),
    service: ProjectsPresentationService = Depends(get_presentation_service),
):
    """List presentations matching every supplied constraint."""
    presentation_filter = ListProjectPresentationsFilter(
        project_ids=_split_csv(project_ids),
        project_id=project_id or None,
        contributor_ids=_split_csv(contributor_ids),
        ids=_split_csv(ids),
    )
    presentations = [
        ProjectPresentationResponse.from_domain(p)
        async for p in service.find_project_presentations(presentation_filter)
    ]
    return ProjectPresentationListResponse(presentations=presentations)


@router.get("/{presentation_id}", response_model=ProjectPresentationResponse)
async def get_project_presentation(
    presentation_id: str,
    service: ProjectsPresentationService = Depends(get_presentation_service),
):
    """Get a single presentation."""
    presentation = await service.find_single_project_presentation(presentation_id)
    if presentation is None:
        raise _not_found(presentation_id)
    return ProjectPresentationResponse.from_domain(presentation)


@router.post(
    "", response_model=ProjectPresentationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project_presentation(
    body: ProjectPresentationCreate,
    contributor: SimpleContributor | None = Depends(get_requesting_contributor),
    service: ProjectsPresentationService = Depends(get_presentation_service),
):
    """Create a presentation; the requesting contributor becomes a contributor."""
    extra = (contributor,) if contributor else ()
    saved = await service.create_project_presentation(body.to_domain(extra))
    logger.info(
        "Presentation created",
        extra={"presentation_id": saved.id, "project_id": saved.project_id},
    )
    return ProjectPresentationResponse.from_domain(saved)


@router.put("/{presentation_id}", response_model=ProjectPresentationResponse)
async def update_project_presentation(
    presentation_id: str,
    body: ProjectPresentationUpdate,
    contributor: SimpleContributor = Depends(require_requesting_contributor),
    service: ProjectsPresentationService = Depends(get_presentation_service),
):
    """Replace referenceName and sections of a presentation the contributor belongs to."""
    saved = await service.update_project_presentation(
        presentation_id, body.to_domain(), contributor,
    )
    if saved is None:
        raise _not_found(presentation_id, contributor)
    return ProjectPresentationResponse.from_domain(saved)
