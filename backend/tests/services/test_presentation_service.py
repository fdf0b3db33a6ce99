"""ProjectsPresentationService tests — service contract against a mocked repository.

Invariants:
    - Malformed ids never reach the store
    - Read, list, and create results are passed through unchanged (same objects)
    - Update performs exactly one scoped lookup then one save, merging only
      reference_name and sections
    - A scoped-lookup miss returns None without saving
    - Store failures propagate unchanged
"""

from unittest.mock import AsyncMock, MagicMock, call
from uuid import uuid4

import pytest

from app.core.presentation import (
    ListProjectPresentationsFilter,
    PresentationSection,
    ProjectPresentation,
    SimpleContributor,
)
from app.services.presentation_service import ProjectsPresentationService


async def _stream(items):
    for item in items:
        yield item


@pytest.fixture
def repository():
    repo = AsyncMock()
    repo.find_using_filter = MagicMock()
    return repo


@pytest.fixture
def service(repository):
    return ProjectsPresentationService(repository)


@pytest.fixture
def contributor():
    return SimpleContributor("1", frozenset())


@pytest.fixture
def presentation(contributor):
    return ProjectPresentation(
        project_id="mockedProjectId",
        contributors={contributor},
        reference_name="mockedReferenceName",
        sections=(),
    )


# --- find_single_project_presentation ----------------------------------------

async def test_find_single_returns_repository_result_unchanged(
    service, repository, presentation,
):
    presentation_id = str(uuid4())
    repository.find_by_id.return_value = presentation

    result = await service.find_single_project_presentation(presentation_id)

    assert result is presentation
    repository.find_by_id.assert_awaited_once_with(presentation_id)


async def test_find_single_passes_through_not_found(service, repository):
    repository.find_by_id.return_value = None
    assert await service.find_single_project_presentation(str(uuid4())) is None


@pytest.mark.parametrize("malformed", ["", "id1", "not-a-uuid", "   "])
async def test_find_single_with_malformed_id_skips_store(
    service, repository, malformed,
):
    assert await service.find_single_project_presentation(malformed) is None
    repository.find_by_id.assert_not_called()


# --- find_project_presentations ----------------------------------------------

async def test_find_presentations_streams_repository_results_in_order(
    service, repository, presentation,
):
    second = ProjectPresentation(project_id="other", reference_name="second")
    presentation_filter = ListProjectPresentationsFilter()
    repository.find_using_filter.return_value = _stream([presentation, second])

    results = [p async for p in service.find_project_presentations(presentation_filter)]

    assert results[0] is presentation
    assert results[1] is second
    repository.find_using_filter.assert_called_once_with(presentation_filter)


async def test_find_presentations_with_no_matches_is_empty(service, repository):
    presentation_filter = ListProjectPresentationsFilter(project_id="missing")
    repository.find_using_filter.return_value = _stream([])

    results = [p async for p in service.find_project_presentations(presentation_filter)]

    assert results == []


# --- create_project_presentation ---------------------------------------------

async def test_create_returns_saved_presentation(service, repository, presentation):
    saved = ProjectPresentation(
        id="savedMockedProjectId",
        project_id="mockedProjectId",
        contributors=presentation.contributors,
        reference_name="mockedReferenceName",
    )
    repository.save.return_value = saved

    result = await service.create_project_presentation(presentation)

    assert result is saved
    repository.save.assert_awaited_once_with(presentation)


async def test_create_twice_yields_distinct_store_ids(service, repository, presentation):
    repository.save.side_effect = lambda p: ProjectPresentation(
        id=str(uuid4()), project_id=p.project_id,
        contributors=p.contributors, reference_name=p.reference_name,
    )

    first = await service.create_project_presentation(presentation)
    second = await service.create_project_presentation(presentation)

    assert first.id != second.id
    assert repository.save.await_count == 2


# --- update_project_presentation ---------------------------------------------

async def test_update_merges_and_returns_saved(service, repository, contributor):
    existing = ProjectPresentation(
        id="mockedProjectId",
        project_id="mockedProjectId",
        contributors={contributor},
        reference_name="mockedReferenceName",
        sections=(),
    )
    incoming = ProjectPresentation(
        id="mockedProjectId",
        project_id="mockedProjectId",
        contributors={contributor},
        reference_name="mockedUpdatedReferenceName",
        sections=(),
    )
    saved = ProjectPresentation(
        id="savedMockedProjectId",
        project_id="mockedProjectId",
        contributors={contributor},
        reference_name="mockedReferenceName",
    )
    repository.find_by_id_for_contributor.return_value = existing
    repository.save.return_value = saved

    result = await service.update_project_presentation("id1", incoming, contributor)

    assert result is saved
    expected_filter = ListProjectPresentationsFilter(
        project_ids=["mockedProjectId"],
        project_id=None,
        contributor_ids=["1"],
        ids=["id1"],
    )
    persisted = repository.save.await_args.args[0]
    assert persisted.reference_name == "mockedUpdatedReferenceName"
    assert persisted.contributor_ids == frozenset({"1"})
    assert repository.mock_calls == [
        call.find_by_id_for_contributor(expected_filter, contributor),
        call.save(persisted),
    ]


async def test_update_keeps_identity_and_ownership_of_stored_document(
    service, repository, contributor,
):
    existing = ProjectPresentation(
        id="stored-id",
        project_id="p1",
        contributors={contributor, SimpleContributor("2", frozenset({"editor"}))},
        reference_name="old",
        sections=(PresentationSection("old section"),),
    )
    incoming = ProjectPresentation(
        id="forged-id",
        project_id="p1",
        contributors={SimpleContributor("99")},
        reference_name="new",
        sections=(PresentationSection("first"), PresentationSection("second")),
    )
    repository.find_by_id_for_contributor.return_value = existing
    repository.save.side_effect = lambda p: p

    result = await service.update_project_presentation("stored-id", incoming, contributor)

    assert result.reference_name == "new"
    assert result.sections == incoming.sections
    assert result.id == "stored-id"
    assert result.project_id == "p1"
    assert result.contributors == existing.contributors


async def test_update_replaces_sections_wholesale(service, repository, contributor):
    existing = ProjectPresentation(
        id="stored-id", project_id="p1", contributors={contributor},
        reference_name="name",
        sections=(PresentationSection("a"), PresentationSection("b")),
    )
    incoming = ProjectPresentation(
        project_id="p1", reference_name="name",
        sections=(PresentationSection("c"),),
    )
    repository.find_by_id_for_contributor.return_value = existing
    repository.save.side_effect = lambda p: p

    result = await service.update_project_presentation("stored-id", incoming, contributor)

    assert result.sections == (PresentationSection("c"),)


async def test_update_scoped_lookup_miss_returns_none_without_saving(
    service, repository, presentation, contributor,
):
    repository.find_by_id_for_contributor.return_value = None

    result = await service.update_project_presentation("id1", presentation, contributor)

    assert result is None
    repository.save.assert_not_called()


async def test_update_propagates_store_failure_from_save(
    service, repository, presentation, contributor,
):
    repository.find_by_id_for_contributor.return_value = presentation
    repository.save.side_effect = RuntimeError("store unavailable")

    with pytest.raises(RuntimeError, match="store unavailable"):
        await service.update_project_presentation("id1", presentation, contributor)


async def test_create_propagates_store_failure(service, repository, presentation):
    repository.save.side_effect = ConnectionError("connection refused")

    with pytest.raises(ConnectionError):
        await service.create_project_presentation(presentation)
