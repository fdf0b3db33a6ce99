"""Presentation Repository — SQLAlchemy implementation of ProjectPresentationRepository.

Invariants:
    - Returns frozen core values (app.core.presentation), never ORM rows
    - Malformed presentation ids never match; they are not an error on lookup
    - find_using_filter streams in creation order (server-side cursor, batched);
      each call runs a fresh query
    - save is an upsert: new UUID when id is absent, overwrite when present
    - Contributor membership is unique per contributor_id (roles of duplicates are unioned)

Design Decisions:
    - Filters compile to SQL (IN / = / EXISTS) so scoping happens in the store
    - save re-reads with populate_existing so callers get what the store holds
"""

import logging
import uuid
from typing import AsyncIterator

from sqlalchemy import select, Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import PresentationId, ProjectId, ContributorId, parse_presentation_id
from app.core.presentation import (
    ListProjectPresentationsFilter,
    PresentationSection,
    ProjectPresentation,
    SimpleContributor,
)
from app.models.project_presentation import (
    PresentationContributor as ContributorModel,
    ProjectPresentation as PresentationModel,
)

logger = logging.getLogger(__name__)

# Rows fetched per round trip while streaming; contributors load per batch
STREAM_BATCH_SIZE = 100


class SqlProjectPresentationRepository:
    """Presentation persistence over an AsyncSession (one per request)."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_id(self, presentation_id: str) -> ProjectPresentation | None:
        uid = parse_presentation_id(presentation_id)
        if uid is None:
            return None
        model = await self._db.get(PresentationModel, uid)
        return to_domain(model) if model else None

    async def find_using_filter(
        self, presentation_filter: ListProjectPresentationsFilter,
    ) -> AsyncIterator[ProjectPresentation]:
        query = build_filter_query(presentation_filter)
        if query is None:
            return
        result = await self._db.stream_scalars(
            query.order_by(PresentationModel.created_at, PresentationModel.id)
            .execution_options(yield_per=STREAM_BATCH_SIZE),
        )
        try:
            async for model in result:
                yield to_domain(model)
        finally:
            await result.close()

    async def find_by_id_for_contributor(
        self,
        presentation_filter: ListProjectPresentationsFilter,
        contributor: SimpleContributor,
    ) -> ProjectPresentation | None:
        query = build_filter_query(presentation_filter)
        if query is None:
            return None
        query = query.where(
            PresentationModel.contributors.any(
                ContributorModel.contributor_id == contributor.contributor_id,
            ),
        ).limit(1)
        result = await self._db.execute(query)
        model = result.scalars().first()
        return to_domain(model) if model else None

    async def save(self, presentation: ProjectPresentation) -> ProjectPresentation:
        model = None
        if presentation.id is not None:
            uid = parse_presentation_id(presentation.id)
            if uid is None:
                raise ValueError(f"Malformed presentation id: {presentation.id!r}")
            model = await self._db.get(PresentationModel, uid)
        else:
            uid = uuid.uuid4()
        if model is None:
            model = PresentationModel(id=uid)
            self._db.add(model)

        model.project_id = presentation.project_id
        model.reference_name = presentation.reference_name
        model.sections = [s.to_dict() for s in presentation.sections]
        _sync_contributors(model, presentation.contributors)

        await self._db.commit()
        saved = await self._db.get(PresentationModel, uid, populate_existing=True)
        logger.debug(
            "Presentation saved",
            extra={"presentation_id": str(uid), "project_id": presentation.project_id},
        )
        return to_domain(saved)


def build_filter_query(
    presentation_filter: ListProjectPresentationsFilter,
) -> Select | None:
    """Compile a filter into a SELECT, or None when it can match nothing."""
    query = select(PresentationModel)
    if presentation_filter.is_empty:
        return query
    if presentation_filter.project_ids:
        query = query.where(
            PresentationModel.project_id.in_(presentation_filter.project_ids),
        )
    if presentation_filter.project_id:
        query = query.where(
            PresentationModel.project_id == presentation_filter.project_id,
        )
    if presentation_filter.contributor_ids:
        query = query.where(
            PresentationModel.contributors.any(
                ContributorModel.contributor_id.in_(presentation_filter.contributor_ids),
            ),
        )
    if presentation_filter.ids:
        uids = [
            uid for uid in map(parse_presentation_id, presentation_filter.ids)
            if uid is not None
        ]
        if not uids:
            return None
        query = query.where(PresentationModel.id.in_(uids))
    return query


def to_domain(model: PresentationModel) -> ProjectPresentation:
    """Map an ORM row (with contributors loaded) to a frozen core value."""
    return ProjectPresentation(
        id=PresentationId(str(model.id)),
        project_id=ProjectId(model.project_id),
        contributors=frozenset(
            SimpleContributor(ContributorId(c.contributor_id), frozenset(c.roles or ()))
            for c in model.contributors
        ),
        reference_name=model.reference_name,
        sections=tuple(
            PresentationSection.from_dict(s) for s in model.sections or ()
        ),
    )


def _sync_contributors(
    model: PresentationModel, contributors: frozenset[SimpleContributor],
) -> None:
    """Reconcile child rows in place: keep matching ids, drop missing, add new."""
    wanted: dict[str, set[str]] = {}
    for contributor in contributors:
        wanted.setdefault(contributor.contributor_id, set()).update(contributor.roles)

    for row in list(model.contributors):
        if row.contributor_id in wanted:
            row.roles = sorted(wanted.pop(row.contributor_id))
        else:
            model.contributors.remove(row)
    for contributor_id, roles in wanted.items():
        model.contributors.append(
            ContributorModel(contributor_id=contributor_id, roles=sorted(roles)),
        )
