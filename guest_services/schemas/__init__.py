"""Pydantic Schemas - response shapes for API endpoints.

Invariants:
    - Domain enums from core/ used for status and priority

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
