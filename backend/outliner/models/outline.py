"""
Outliner Backend — Outline SQLAlchemy Models
==============================================

What:  ORM models for the `sections`, `subsections` and `items` tables.
How:   Inherit from the shared DeclarativeBase; the schema initializer creates
       the tables from this metadata.
Who:   Used by OutlineService to build insert/update/delete/select statements.

Table Design:
    sections      id, title, content, position, created_at
    subsections   id, section_id → sections.id ON DELETE CASCADE, ...
    items         id, subsection_id → subsections.id ON DELETE CASCADE, ...

    Cascades live in the store (ON DELETE CASCADE), not in ORM relationships:
    deletes are issued as plain DELETE statements and the store removes the
    descendants.

    position is assigned at insert time as max(sibling positions) + 1 and is
    never renumbered, so gaps after deletes are normal.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from outliner.database import Base


class Section(Base):
    """Top-level node of the outline."""

    __tablename__ = "sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Section(id={self.id}, position={self.position}, title='{self.title}')>"


class Subsection(Base):
    """
    Second-level node; belongs to exactly one section.

    Deleting the parent section deletes the subsection (and its items).
    """

    __tablename__ = "subsections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    section_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<Subsection(id={self.id}, section_id={self.section_id}, "
            f"position={self.position})>"
        )


class Item(Base):
    """Leaf node; belongs to exactly one subsection."""

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    subsection_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subsections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<Item(id={self.id}, subsection_id={self.subsection_id}, "
            f"position={self.position})>"
        )
