"""Database Base — SQLAlchemy declarative base shared by all catalog models.

Invariants:
    - All sessions are async (AsyncSession); engines are built in infrastructure/database.py
"""
