"""Presentation Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Wire format is camelCase (projectId, referenceName, ...); snake_case also accepted on input
    - reference_name: 1-200 chars, stripped, non-blank
    - sections: at most 100, order preserved
    - Length limits apply to request models only; response models render any stored value
    - to_domain()/from_domain() are the only crossings between wire and core values

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one rule for every model
    - Separate unconstrained response models: data written before a limit existed
      (or through the service directly) must still render
    - Contributors rendered sorted by id so responses are deterministic
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.domain_types import ContributorId, ProjectId
from app.core.presentation import (
    PresentationMedia,
    PresentationSection,
    ProjectPresentation,
    SimpleContributor,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Request models ─────────────────────────────────────────────

class PresentationMediaSchema(CamelModel):
    """Media reference inside a section."""
    media_type: str = Field(min_length=1, max_length=50)
    url: str = Field(min_length=1, max_length=2000)
    thumbnail_url: str | None = Field(None, max_length=2000)
    resource_id: str | None = Field(None, max_length=200)

    def to_domain(self) -> PresentationMedia:
        return PresentationMedia(
            media_type=self.media_type,
            url=self.url,
            thumbnail_url=self.thumbnail_url,
            resource_id=self.resource_id,
        )


class PresentationSectionSchema(CamelModel):
    """Freeform content block."""
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=10_000)
    main_media: PresentationMediaSchema | None = None
    media: list[PresentationMediaSchema] = Field(default_factory=list, max_length=50)

    def to_domain(self) -> PresentationSection:
        return PresentationSection(
            title=self.title,
            description=self.description,
            main_media=self.main_media.to_domain() if self.main_media else None,
            media=tuple(m.to_domain() for m in self.media),
        )


class ContributorSchema(CamelModel):
    contributor_id: str = Field(min_length=1, max_length=200)
    roles: list[str] = Field(default_factory=list)

    def to_domain(self) -> SimpleContributor:
        return SimpleContributor(ContributorId(self.contributor_id), frozenset(self.roles))


class ProjectPresentationBody(CamelModel):
    """Shared request body for create and update."""
    project_id: str = Field(min_length=1, max_length=200)
    reference_name: str = Field(min_length=1, max_length=200)
    sections: list[PresentationSectionSchema] = Field(
        default_factory=list, max_length=100,
    )
    contributors: list[ContributorSchema] = Field(default_factory=list)

    @field_validator("project_id", "reference_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    def to_domain(
        self, extra_contributors: tuple[SimpleContributor, ...] = (),
    ) -> ProjectPresentation:
        return ProjectPresentation(
            project_id=ProjectId(self.project_id),
            contributors=frozenset(
                [c.to_domain() for c in self.contributors] + list(extra_contributors),
            ),
            reference_name=self.reference_name,
            sections=tuple(s.to_domain() for s in self.sections),
        )


class ProjectPresentationCreate(ProjectPresentationBody):
    """Presentation creation: the requesting contributor is added to contributors."""


class ProjectPresentationUpdate(ProjectPresentationBody):
    """Presentation update: only referenceName and sections are applied."""


# ─── Response models ────────────────────────────────────────────

class PresentationMediaResponse(CamelModel):
    media_type: str
    url: str
    thumbnail_url: str | None = None
    resource_id: str | None = None

    @classmethod
    def from_domain(cls, media: PresentationMedia) -> "PresentationMediaResponse":
        return cls(
            media_type=media.media_type,
            url=media.url,
            thumbnail_url=media.thumbnail_url,
            resource_id=media.resource_id,
        )


class PresentationSectionResponse(CamelModel):
    title: str
    description: str = ""
    main_media: PresentationMediaResponse | None = None
    media: list[PresentationMediaResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, section: PresentationSection) -> "PresentationSectionResponse":
        return cls(
            title=section.title,
            description=section.description,
            main_media=(
                PresentationMediaResponse.from_domain(section.main_media)
                if section.main_media else None
            ),
            media=[PresentationMediaResponse.from_domain(m) for m in section.media],
        )


class ContributorResponse(CamelModel):
    contributor_id: str
    roles: list[str]

    @classmethod
    def from_domain(cls, contributor: SimpleContributor) -> "ContributorResponse":
        return cls(contributor_id=contributor.contributor_id, roles=sorted(contributor.roles))


class ProjectPresentationResponse(CamelModel):
    """Presentation response: public-facing presentation data."""
    id: str
    project_id: str
    contributors: list[ContributorResponse]
    reference_name: str
    sections: list[PresentationSectionResponse]

    @classmethod
    def from_domain(cls, presentation: ProjectPresentation) -> "ProjectPresentationResponse":
        return cls(
            id=presentation.id,
            project_id=presentation.project_id,
            contributors=[
                ContributorResponse.from_domain(c)
                for c in sorted(presentation.contributors, key=lambda c: c.contributor_id)
            ],
            reference_name=presentation.reference_name,
            sections=[PresentationSectionResponse.from_domain(s) for s in presentation.sections],
        )


class ProjectPresentationListResponse(CamelModel):
    presentations: list[ProjectPresentationResponse]
