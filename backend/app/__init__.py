"""
HealthTrack Backend — Application Package Initializer
======================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Security (tokens, password hash)  │  ← Identity for protected routes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, ID generation, SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine on app.state
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
