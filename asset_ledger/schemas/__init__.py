"""Pydantic Schemas: request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies)
    - Field aliases match stored record field names (ID, Color, Size, ...)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
