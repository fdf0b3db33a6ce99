"""API Schemas — Pydantic request/response models for the presentation endpoints.

Invariants:
    - Schemas validate shape and size only; business rules live in services/core
"""
