"""
Q&A Backend: Application Package Initializer
=============================================

What: Marks the `qanda` directory as a Python package.
Who:  Used by uvicorn (`qanda.main:app`), pytest, and the `qanda-server` script.

Architecture Note:
    The backend follows the same layering for every entity:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Validators / Guards / Services    │  ← gating steps, then SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← pooled async engine
    └─────────────────────────────────────┘

    A request passes the steps in a fixed order: validate the input, check
    that referenced rows exist, execute the statements. A failing step raises
    and the global exception handlers build the error response.
"""

__version__ = "1.0.0"
