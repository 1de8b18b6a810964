"""
Outliner Backend — Outline Tree Route
=======================================

What:  Handles GET /api/data, the single read endpoint of the API.
How:   Delegates to OutlineService.get_tree() and returns the nested tree.
Who:   Called by the front-end on load and after every mutation.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outliner.database import get_db_session
from outliner.schemas.outline import ErrorResponse, TreeResponse
from outliner.services.outline_service import outline_service

router = APIRouter(prefix="/api", tags=["Outline"])


@router.get(
    "/data",
    response_model=TreeResponse,
    responses={
        200: {"description": "The whole outline", "model": TreeResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Get the full outline",
    description=(
        "Returns every section with its subsections and their items, each level "
        "ordered by position. Childless nodes carry empty lists."
    ),
)
async def get_data(db: AsyncSession = Depends(get_db_session)) -> TreeResponse:
    return await outline_service.get_tree(db)
