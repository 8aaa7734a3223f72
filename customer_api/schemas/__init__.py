"""Pydantic Schemas — request/response shapes for the customer endpoints.

Invariants:
    - Wire and storage keys are camelCase (firstName, phoneNumber, ...)
    - Schemas shape payloads and feed the OpenAPI document; they add no business rules
"""
