"""
Outliner Backend — Section Route Handlers
===========================================

What:  Handles POST /api/sections, PUT /api/sections/{id} and
       DELETE /api/sections/{id}.
How:   Parses the JSON body, delegates to OutlineService, returns JSON.
Who:   Called by the front-end section editor.

Deleting a section also removes its subsections and their items; the store's
ON DELETE CASCADE does the work.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outliner.database import get_db_session
from outliner.schemas.outline import (
    ErrorResponse,
    NodeUpdate,
    SectionCreate,
    SectionRow,
    SuccessResponse,
)
from outliner.services.outline_service import outline_service

router = APIRouter(prefix="/api", tags=["Sections"])


@router.post(
    "/sections",
    response_model=SectionRow,
    responses={
        200: {"description": "The created section row", "model": SectionRow},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a section",
    description="Appends a section after the last one. Content defaults to an empty string.",
)
async def create_section(
    payload: SectionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> SectionRow:
    return await outline_service.create_section(db, payload)


@router.put(
    "/sections/{section_id}",
    response_model=SuccessResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Update a section's title and content",
)
async def update_section(
    section_id: int,
    payload: NodeUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await outline_service.update_section(db, section_id, payload)


@router.delete(
    "/sections/{section_id}",
    response_model=SuccessResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Delete a section with its subsections and items",
)
async def delete_section(
    section_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await outline_service.delete_section(db, section_id)
