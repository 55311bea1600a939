"""Database Declarations — the SQLAlchemy Base shared by models and migrations.

Invariants:
    - Base.metadata is the single source for create_schema() and alembic autogenerate

Design Decisions:
    - Engine and sessions live in infrastructure/database.py; this package holds
      declarations only, so alembic can import it without an event loop
"""
