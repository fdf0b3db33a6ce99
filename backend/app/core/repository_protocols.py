"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; find_using_filter is an async
      iterator so results stream lazily and each call yields a fresh stream
"""

from typing import AsyncIterator, Protocol

from app.core.presentation import (
    ListProjectPresentationsFilter, ProjectPresentation, SimpleContributor,
)


class ProjectPresentationRepository(Protocol):
    """Contract for project presentation persistence: implemented by shell."""
    async def find_by_id(self, presentation_id: str) -> ProjectPresentation | None: ...

    def find_using_filter(
        self, presentation_filter: ListProjectPresentationsFilter,
    ) -> AsyncIterator[ProjectPresentation]: ...

    async def find_by_id_for_contributor(
        self,
        presentation_filter: ListProjectPresentationsFilter,
        contributor: SimpleContributor,
    ) -> ProjectPresentation | None: ...

    async def save(self, presentation: ProjectPresentation) -> ProjectPresentation: ...
