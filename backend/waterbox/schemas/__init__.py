"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Domain enums from core/ used for status and type fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
