"""
Outliner Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the JSON contract of the /api endpoints.
How:   FastAPI parses request bodies into the *Create / NodeUpdate models and
       serializes responses from the tree, row and acknowledgment models.
Who:   Used by the route handlers, the outline service and the tree assembler.

Request bodies are loose: every field is optional, numbers sent as title or
content are stored as their text, and nothing else is checked. A missing
title reaches the store and is rejected there by the NOT NULL constraint.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class _RequestBody(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


class SectionCreate(_RequestBody):
    """Body of POST /api/sections."""
    title: Optional[str] = Field(default=None, description="Section title")
    content: Optional[str] = Field(default=None, description="Free text; defaults to empty")


class SubsectionCreate(_RequestBody):
    """Body of POST /api/subsections."""
    section_id: Optional[int] = Field(default=None, description="Parent section ID")
    title: Optional[str] = Field(default=None, description="Subsection title")
    content: Optional[str] = Field(default=None, description="Free text; defaults to empty")


class ItemCreate(_RequestBody):
    """Body of POST /api/items."""
    subsection_id: Optional[int] = Field(default=None, description="Parent subsection ID")
    title: Optional[str] = Field(default=None, description="Item title")
    content: Optional[str] = Field(default=None, description="Free text; defaults to empty")


class NodeUpdate(_RequestBody):
    """
    Body of PUT /api/{sections,subsections,items}/{id}.

    Only title and content can change; position and the parent link are
    fixed at creation.
    """
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New content; defaults to empty")


# ══════════════════════════════════════════════════════════════════════════
# Tree Models: GET /api/data
# ══════════════════════════════════════════════════════════════════════════


class ItemNode(BaseModel):
    id: int
    title: str
    content: Optional[str] = None
    position: int


class SubsectionNode(BaseModel):
    id: int
    title: str
    content: Optional[str] = None
    position: int
    items: List[ItemNode] = Field(default_factory=list)


class SectionNode(BaseModel):
    id: int
    title: str
    content: Optional[str] = None
    position: int
    subsections: List[SubsectionNode] = Field(default_factory=list)


class TreeResponse(BaseModel):
    """
    What:  The whole outline, nested three levels deep.
    Order: Every list is in ascending position order, as stored.
    """
    sections: List[SectionNode] = Field(description="Sections with their subsections and items")


# ══════════════════════════════════════════════════════════════════════════
# Created Row Models: POST responses
# ══════════════════════════════════════════════════════════════════════════


class SectionRow(BaseModel):
    """The inserted sections row, including the assigned id and position."""
    id: int
    title: str
    content: Optional[str] = None
    position: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SubsectionRow(BaseModel):
    id: int
    section_id: int
    title: str
    content: Optional[str] = None
    position: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ItemRow(BaseModel):
    id: int
    subsection_id: int
    title: str
    content: Optional[str] = None
    position: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Acknowledgment / Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class SuccessResponse(BaseModel):
    """Returned by every PUT and DELETE, whether or not a row matched."""
    success: bool = True


class ErrorResponse(BaseModel):
    """
    Single error shape for every failure.

    Example:
        {"error": "insert or update on table \\"subsections\\" violates foreign key constraint ..."}
    """
    error: str = Field(description="Underlying error message")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since the process started")
