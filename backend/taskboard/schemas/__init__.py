"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Enumerated fields use the core enums, so out-of-range literals fail here with 400
    - No response schema exposes a password hash

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
