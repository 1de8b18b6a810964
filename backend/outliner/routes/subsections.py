"""
Outliner Backend — Subsection Route Handlers
==============================================

What:  Handles POST /api/subsections, PUT /api/subsections/{id} and
       DELETE /api/subsections/{id}.
Who:   Called by the front-end subsection editor.

The body's section_id is not looked up first. A section that does not exist
is rejected by the store's foreign key and reported as a 500.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outliner.database import get_db_session
from outliner.schemas.outline import (
    ErrorResponse,
    NodeUpdate,
    SubsectionCreate,
    SubsectionRow,
    SuccessResponse,
)
from outliner.services.outline_service import outline_service

router = APIRouter(prefix="/api", tags=["Subsections"])


@router.post(
    "/subsections",
    response_model=SubsectionRow,
    responses={
        200: {"description": "The created subsection row", "model": SubsectionRow},
        500: {"description": "Store failure or unknown section", "model": ErrorResponse},
    },
    summary="Create a subsection under a section",
    description=(
        "Appends a subsection after the last subsection of the given section. "
        "Content defaults to an empty string."
    ),
)
async def create_subsection(
    payload: SubsectionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> SubsectionRow:
    return await outline_service.create_subsection(db, payload)


@router.put(
    "/subsections/{subsection_id}",
    response_model=SuccessResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Update a subsection's title and content",
)
async def update_subsection(
    subsection_id: int,
    payload: NodeUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await outline_service.update_subsection(db, subsection_id, payload)


@router.delete(
    "/subsections/{subsection_id}",
    response_model=SuccessResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Delete a subsection with its items",
)
async def delete_subsection(
    subsection_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await outline_service.delete_subsection(db, subsection_id)
