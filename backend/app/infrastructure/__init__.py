"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Repositories return core domain values, never ORM objects
    - All SQLAlchemy failures surface as DatabaseError

Design Decisions:
    - Repositories satisfy core Protocols structurally (no inheritance)
"""
