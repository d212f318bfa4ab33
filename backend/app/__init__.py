"""
User Registry Backend — Application Package Initializer
=========================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Handlers + User Store)  │  ← validate → store → result
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    Routes turn HandlerResult values into HTTP responses; services never see
    a Request object; the store never sees unvalidated input.
"""

__version__ = "1.0.0"
