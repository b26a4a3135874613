"""Pydantic Schemas — request validation at the HTTP boundary.

Design Decisions:
    - Schemas only check presence/shape; domain constraints live in core/domain_types.py
"""
