"""Initial schema — project_presentations, presentation_contributors.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "project_presentations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("project_id", sa.String(200), nullable=False),
        sa.Column("reference_name", sa.String(200), nullable=False),
        sa.Column("sections", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_project_presentations_project_id", "project_presentations", ["project_id"],
    )

    op.create_table(
        "presentation_contributors",
        sa.Column(
            "presentation_id", UUID(as_uuid=True),
            sa.ForeignKey("project_presentations.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("contributor_id", sa.String(200), primary_key=True),
        sa.Column("roles", sa.JSON, nullable=False),
    )
    op.create_index(
        "ix_presentation_contributors_contributor_id",
        "presentation_contributors", ["contributor_id"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_presentation_contributors_contributor_id",
        table_name="presentation_contributors",
    )
    op.drop_table("presentation_contributors")
    op.drop_index(
        "ix_project_presentations_project_id", table_name="project_presentations",
    )
    op.drop_table("project_presentations")
