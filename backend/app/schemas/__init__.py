"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Engines re-check business rules; schemas only reject malformed shapes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
