"""Database Package — SQLAlchemy declarative Base shared by all ORM models.

Invariants:
    - All models inherit from db.base.Base
    - All sessions are async (AsyncSession), created by infrastructure/database.py
"""
