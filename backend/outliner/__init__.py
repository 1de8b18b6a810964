"""
Outliner Backend — Application Package Initializer
====================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Outline operations,   │  ← statements, tree assembly
    │              tree assembler)        │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Store client)      │  ← engine, pool, sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
