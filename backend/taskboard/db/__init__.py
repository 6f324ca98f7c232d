"""Database Infrastructure — SQLAlchemy declarative Base and column helpers.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
