# Models package init
"""
Outliner Backend — ORM Models
==============================

What:  SQLAlchemy models for the three outline tables.
Who:   Registered on Base.metadata for the schema initializer; used by the
       outline service to build statements.
"""
