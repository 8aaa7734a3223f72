"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Store results and store failures reach the client only through an ErrorPolicy
"""
