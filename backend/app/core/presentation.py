"""Project Presentation — immutable aggregate, query filter, and the update merge.

Invariants:
    - ProjectPresentation is frozen: updates build a new value, never mutate a snapshot
    - project_id is non-empty; contributors is a (possibly empty) frozenset
    - sections keep their order; they are replaced wholesale, never merged element-wise
    - merge_presentation_update touches reference_name and sections only
    - None and [] in a filter field both mean "no constraint"

Design Decisions:
    - Pure dataclasses, no IO: the repository maps ORM rows to these values
    - Filter fields named by what they hold (project_ids vs ids) so the update
      scope reads unambiguously: owning project, contributor membership, own id
"""

from dataclasses import dataclass, replace

from app.core.domain_types import ContributorId, PresentationId, ProjectId


@dataclass(frozen=True)
class SimpleContributor:
    """Contributor reference: identity plus the roles held on the presentation."""
    contributor_id: ContributorId
    roles: frozenset[str] = frozenset()


@dataclass(frozen=True)
class PresentationMedia:
    """A media reference (image, video, ...) shown inside a section."""
    media_type: str
    url: str
    thumbnail_url: str | None = None
    resource_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "media_type": self.media_type,
            "url": self.url,
            "thumbnail_url": self.thumbnail_url,
            "resource_id": self.resource_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PresentationMedia":
        return cls(
            media_type=data["media_type"],
            url=data["url"],
            thumbnail_url=data.get("thumbnail_url"),
            resource_id=data.get("resource_id"),
        )


@dataclass(frozen=True)
class PresentationSection:
    """Freeform content block: no identity, always owned by one presentation."""
    title: str
    description: str = ""
    main_media: PresentationMedia | None = None
    media: tuple[PresentationMedia, ...] = ()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "main_media": self.main_media.to_dict() if self.main_media else None,
            "media": [m.to_dict() for m in self.media],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PresentationSection":
        main_media = data.get("main_media")
        return cls(
            title=data["title"],
            description=data.get("description") or "",
            main_media=PresentationMedia.from_dict(main_media) if main_media else None,
            media=tuple(PresentationMedia.from_dict(m) for m in data.get("media") or []),
        )


@dataclass(frozen=True)
class ProjectPresentation:
    """Aggregate root describing how a project is shown (a name plus ordered sections)."""
    project_id: ProjectId
    contributors: frozenset[SimpleContributor] = frozenset()
    reference_name: str = ""
    sections: tuple[PresentationSection, ...] = ()
    id: PresentationId | None = None

    def __post_init__(self):
        if not self.project_id:
            raise ValueError("project_id is required")
        # Accept any iterable from callers; store the canonical immutable forms
        object.__setattr__(self, "contributors", frozenset(self.contributors))
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def contributor_ids(self) -> frozenset[ContributorId]:
        return frozenset(c.contributor_id for c in self.contributors)

    def has_contributor(self, contributor_id: str) -> bool:
        return contributor_id in self.contributor_ids


@dataclass(frozen=True)
class ListProjectPresentationsFilter:
    """Query parameters for listing presentations. Constraints combine with AND."""
    project_ids: list[str] | None = None
    project_id: str | None = None
    contributor_ids: list[str] | None = None
    ids: list[str] | None = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.project_ids or self.project_id
            or self.contributor_ids or self.ids
        )


def build_contributor_scope_filter(
    presentation_id: str,
    incoming: ProjectPresentation,
    contributor: SimpleContributor,
) -> ListProjectPresentationsFilter:
    """Scope an update lookup to the owning project, the contributor, and the target id."""
    return ListProjectPresentationsFilter(
        project_ids=[incoming.project_id],
        project_id=None,
        contributor_ids=[contributor.contributor_id],
        ids=[presentation_id],
    )


def merge_presentation_update(
    existing: ProjectPresentation, incoming: ProjectPresentation,
) -> ProjectPresentation:
    """Copy reference_name and sections from incoming; keep everything else from existing."""
    return replace(
        existing,
        reference_name=incoming.reference_name,
        sections=incoming.sections,
    )
