"""Customer API Package — CRUD over a MongoDB customers collection.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
