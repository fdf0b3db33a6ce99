"""Projects Presentation Service — find, list, create, and merge-update presentations.

Invariants:
    - Stateless apart from the repository reference: safe to share across tasks
    - Malformed ids short-circuit to None without touching the store
    - Read, list, and create results are returned exactly as the repository returns them
    - Update changes reference_name and sections only; id, project_id, contributors
      always come from the stored document
    - A scoped-lookup miss returns None and never reaches save

Design Decisions:
    - Not-found and not-authorized share the None outcome: the scoped lookup cannot
      tell them apart, and callers map both to 404
    - Store failures propagate unchanged: no retries, no compensation after a failed save
"""

import logging
from typing import AsyncIterator

from app.core.domain_types import is_valid_presentation_id
from app.core.presentation import (
    ListProjectPresentationsFilter,
    ProjectPresentation,
    SimpleContributor,
    build_contributor_scope_filter,
    merge_presentation_update,
)
from app.core.repository_protocols import ProjectPresentationRepository

logger = logging.getLogger(__name__)


class ProjectsPresentationService:
    """Application service over a ProjectPresentationRepository."""

    def __init__(self, repository: ProjectPresentationRepository):
        self.repository = repository

    async def find_single_project_presentation(
        self, presentation_id: str,
    ) -> ProjectPresentation | None:
        if not is_valid_presentation_id(presentation_id):
            return None
        return await self.repository.find_by_id(presentation_id)

    def find_project_presentations(
        self, presentation_filter: ListProjectPresentationsFilter,
    ) -> AsyncIterator[ProjectPresentation]:
        return self.repository.find_using_filter(presentation_filter)

    async def create_project_presentation(
        self, presentation: ProjectPresentation,
    ) -> ProjectPresentation:
        return await self.repository.save(presentation)

    async def update_project_presentation(
        self,
        presentation_id: str,
        incoming: ProjectPresentation,
        requesting_contributor: SimpleContributor,
    ) -> ProjectPresentation | None:
        """Apply incoming's reference_name and sections to the stored presentation.

        The stored document is located with a filter scoped to incoming's project,
        the requesting contributor, and presentation_id. Returns the store's result
        of saving the merged value, or None when no document matched.
        """
        scoped_filter = build_contributor_scope_filter(
            presentation_id, incoming, requesting_contributor,
        )
        existing = await self.repository.find_by_id_for_contributor(
            scoped_filter, requesting_contributor,
        )
        if existing is None:
            logger.warning(
                "Presentation not found for contributor",
                extra={
                    "presentation_id": presentation_id,
                    "contributor_id": requesting_contributor.contributor_id,
                },
            )
            return None

        saved = await self.repository.save(
            merge_presentation_update(existing, incoming),
        )
        logger.info(
            "Presentation updated",
            extra={
                "presentation_id": presentation_id,
                "contributor_id": requesting_contributor.contributor_id,
            },
        )
        return saved
