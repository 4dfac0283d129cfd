"""
Business Manager Backend — Application Package Initializer
==========================================================

What:  Marks the `bizmanager` directory as a Python package.
Who:   Used by uvicorn (`uvicorn bizmanager.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, paths, status codes
    ├─────────────────────────────────────┤
    │     Services (Ledger & Queries)     │  ← ledger rules, access policy
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every mutating request runs in one transaction owned by the session
    dependency, so a ledger update either lands completely or not at all.
"""

__version__ = "1.0.0"
