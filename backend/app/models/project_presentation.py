"""ProjectPresentation ORM — persists the presentation aggregate and its contributors.

Invariants:
    - id is UUID primary key (client-side default, uuid4), never reused
    - project_id and reference_name are non-nullable
    - sections stored in order as a JSON array of section objects
    - (presentation_id, contributor_id) is unique: contributors have set semantics

Design Decisions:
    - JSON column for sections: opaque content blocks, always replaced wholesale
    - Contributors in a child table: membership is what scoped lookups query,
      so it must be filterable with a plain EXISTS on every dialect
    - cascade delete-orphan + selectin: contributors load with their presentation
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class ProjectPresentation(Base):
    """Presentation aggregate root: owns its contributor memberships."""
    __tablename__ = "project_presentations"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[str] = mapped_column(
        String(200), nullable=False, index=True,
    )
    reference_name: Mapped[str] = mapped_column(String(200), nullable=False)
    sections: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    contributors: Mapped[list["PresentationContributor"]] = relationship(
        "PresentationContributor", back_populates="presentation",
        cascade="all, delete-orphan", lazy="selectin",
    )


class PresentationContributor(Base):
    """Contributor membership: one row per contributor per presentation."""
    __tablename__ = "presentation_contributors"

    presentation_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("project_presentations.id", ondelete="CASCADE"),
        primary_key=True,
    )
    contributor_id: Mapped[str] = mapped_column(
        String(200), primary_key=True, index=True,
    )
    roles: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    presentation: Mapped["ProjectPresentation"] = relationship(
        "ProjectPresentation", back_populates="contributors",
    )
