"""Core Layer — pure domain definitions, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
"""
