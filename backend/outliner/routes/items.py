"""Item route handlers: POST /api/items, PUT and DELETE /api/items/{id}."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outliner.database import get_db_session
from outliner.schemas.outline import (
    ErrorResponse,
    ItemCreate,
    ItemRow,
    NodeUpdate,
    SuccessResponse,
)
from outliner.services.outline_service import outline_service

router = APIRouter(prefix="/api", tags=["Items"])


@router.post(
    "/items",
    response_model=ItemRow,
    responses={
        200: {"description": "The created item row", "model": ItemRow},
        500: {"description": "Store failure or unknown subsection", "model": ErrorResponse},
    },
    summary="Create an item under a subsection",
)
async def create_item(
    payload: ItemCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ItemRow:
    return await outline_service.create_item(db, payload)


@router.put(
    "/items/{item_id}",
    response_model=SuccessResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Update an item's title and content",
)
async def update_item(
    item_id: int,
    payload: NodeUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await outline_service.update_item(db, item_id, payload)


@router.delete(
    "/items/{item_id}",
    response_model=SuccessResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Delete an item",
)
async def delete_item(
    item_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await outline_service.delete_item(db, item_id)
