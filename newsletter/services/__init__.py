"""Services Layer — subscription pipeline orchestration and persistence.

Invariants:
    - Services receive validated domain values, never raw request data
"""
