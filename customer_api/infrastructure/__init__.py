"""Infrastructure Layer — MongoDB client lifecycle, store adapter, logging.

Invariants:
    - Infrastructure never imports from api/
    - Driver exceptions propagate unchanged to the caller
"""
