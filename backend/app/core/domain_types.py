"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PresentationId is the string form of a store-assigned UUID
    - ProjectId and ContributorId are opaque strings owned by other services
    - parse_presentation_id never raises: malformed input yields None

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Presentation ids cross the service boundary as str, the store keeps them as UUID
"""

from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PresentationId = NewType("PresentationId", str)
ProjectId = NewType("ProjectId", str)
ContributorId = NewType("ContributorId", str)


def parse_presentation_id(candidate: object) -> UUID | None:
    """Return the UUID behind a presentation id, or None if it is malformed."""
    if isinstance(candidate, UUID):
        return candidate
    if not isinstance(candidate, str) or not candidate.strip():
        return None
    try:
        return UUID(candidate.strip())
    except ValueError:
        return None


def is_valid_presentation_id(candidate: object) -> bool:
    return parse_presentation_id(candidate) is not None
