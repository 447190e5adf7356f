"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure implements the core Protocols; it never holds business rules
    - All SQLAlchemy failures surface as core/errors.py types

Design Decisions:
    - Repositories flush, they never commit: the services own the transaction
"""
