"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ProjectPresentation is the aggregate root; contributors scoped by presentation_id

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.project_presentation import (  # noqa: F401
    ProjectPresentation, PresentationContributor,
)
