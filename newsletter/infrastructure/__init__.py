"""Infrastructure Layer — database, email provider client, logging setup.

Invariants:
    - Infrastructure never imports services/ or api/
    - All external failures mapped to the NewsletterError hierarchy (core/errors.py)
"""
