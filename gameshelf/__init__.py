"""
GameShelf Backend — Application Package Initializer
=====================================================

What: A small REST API for game records (title, date, genre).

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Presence checks, id resolution
    ├─────────────────────────────────────┤
    │      Repositories (Data Access)     │  ← Single-record store operations
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database handle, sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
