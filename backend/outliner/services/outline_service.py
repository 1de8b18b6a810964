"""
Outliner Backend — Outline Service
====================================

What:  The twelve outline operations: read the whole tree, and create,
       update, delete for sections, subsections and items.
How:   Each operation builds one SQLAlchemy Core statement against the
       model's table and runs it on the session passed in by the route.
Who:   Called by the route handlers in outliner.routes.
When:  Once per API request.

Statement map:
    get_tree           SELECT ... FROM sections
                       LEFT JOIN subsections LEFT JOIN items
                       ORDER BY positions → tree assembler
    create_<kind>      INSERT ... VALUES (..., (SELECT COALESCE(MAX(position), 0) + 1
                                                FROM <table> WHERE <parent fk> = :parent))
                       RETURNING *
    update_<kind>      UPDATE <table> SET title, content WHERE id
    delete_<kind>      DELETE FROM <table> WHERE id   (store cascades to children)

Position assignment:
    The next position is computed inside the INSERT itself, so there is no
    gap between reading the sibling maximum and writing the row. Under
    PostgreSQL READ COMMITTED two inserts that run at exactly the same time
    can still both see the same maximum; positions are an ordering hint and
    duplicates only affect tie order, which the tree query breaks by id.

Error Handling:
    Any failure while running a statement (SQLAlchemy errors, and driver
    errors SQLAlchemy does not wrap, such as an id too large for SQLite's
    INTEGER) is logged and re-raised as StoreOperationError with its message.
    Parent ids are not checked up front; a missing parent is rejected by
    the store's foreign key.
"""

import logging
from typing import Any, Dict, Optional, Type

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from outliner.database import Base
from outliner.exceptions import StoreOperationError
from outliner.models.outline import Item, Section, Subsection
from outliner.schemas.outline import (
    ItemCreate,
    ItemRow,
    NodeUpdate,
    SectionCreate,
    SectionRow,
    SubsectionCreate,
    SubsectionRow,
    SuccessResponse,
    TreeResponse,
)
from outliner.services.tree_assembler import assemble_tree

logger = logging.getLogger(__name__)


class OutlineService:
    """
    Stateless operations over the outline tables.

    Every method takes the request's AsyncSession explicitly. Writes commit
    before returning; failures leave rollback to get_db_session().
    """

    # ── Read ──────────────────────────────────────────────────────────────

    async def get_tree(self, db: AsyncSession) -> TreeResponse:
        """
        Load every section, subsection and item as one nested tree.

        Query plan:
            sections LEFT JOIN subsections ON section_id
                     LEFT JOIN items       ON subsection_id
            ORDER BY section.position, subsection.position, item.position
            (each followed by its id for a stable order on equal positions)
        """
        query = (
            select(
                Section.id.label("section_id"),
                Section.title.label("section_title"),
                Section.content.label("section_content"),
                Section.position.label("section_position"),
                Subsection.id.label("subsection_id"),
                Subsection.title.label("subsection_title"),
                Subsection.content.label("subsection_content"),
                Subsection.position.label("subsection_position"),
                Item.id.label("item_id"),
                Item.title.label("item_title"),
                Item.content.label("item_content"),
                Item.position.label("item_position"),
            )
            .select_from(Section)
            .outerjoin(Subsection, Section.id == Subsection.section_id)
            .outerjoin(Item, Subsection.id == Item.subsection_id)
            .order_by(
                Section.position,
                Section.id,
                Subsection.position,
                Subsection.id,
                Item.position,
                Item.id,
            )
        )

        try:
            result = await db.execute(query)
            rows = result.mappings().all()
        except Exception as e:
            logger.error("Failed to load outline tree: %s", str(e))
            raise StoreOperationError.from_exception(e, operation="get_tree")

        sections = assemble_tree(rows)
        logger.debug("Loaded outline: %d rows, %d sections", len(rows), len(sections))
        return TreeResponse(sections=sections)

    # ── Create ────────────────────────────────────────────────────────────

    async def create_section(self, db: AsyncSession, payload: SectionCreate) -> SectionRow:
        row = await self._insert_at_end(
            db,
            Section,
            parent_column=None,
            parent_id=None,
            values={"title": payload.title, "content": payload.content or ""},
        )
        return SectionRow.model_validate(row)

    async def create_subsection(self, db: AsyncSession, payload: SubsectionCreate) -> SubsectionRow:
        row = await self._insert_at_end(
            db,
            Subsection,
            parent_column="section_id",
            parent_id=payload.section_id,
            values={"title": payload.title, "content": payload.content or ""},
        )
        return SubsectionRow.model_validate(row)

    async def create_item(self, db: AsyncSession, payload: ItemCreate) -> ItemRow:
        row = await self._insert_at_end(
            db,
            Item,
            parent_column="subsection_id",
            parent_id=payload.subsection_id,
            values={"title": payload.title, "content": payload.content or ""},
        )
        return ItemRow.model_validate(row)

    # ── Update ────────────────────────────────────────────────────────────

    async def update_section(self, db: AsyncSession, node_id: int, payload: NodeUpdate) -> SuccessResponse:
        return await self._update(db, Section, node_id, payload)

    async def update_subsection(self, db: AsyncSession, node_id: int, payload: NodeUpdate) -> SuccessResponse:
        return await self._update(db, Subsection, node_id, payload)

    async def update_item(self, db: AsyncSession, node_id: int, payload: NodeUpdate) -> SuccessResponse:
        return await self._update(db, Item, node_id, payload)

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete_section(self, db: AsyncSession, node_id: int) -> SuccessResponse:
        """Delete a section; the store cascades to its subsections and items."""
        return await self._delete(db, Section, node_id)

    async def delete_subsection(self, db: AsyncSession, node_id: int) -> SuccessResponse:
        """Delete a subsection; the store cascades to its items."""
        return await self._delete(db, Subsection, node_id)

    async def delete_item(self, db: AsyncSession, node_id: int) -> SuccessResponse:
        return await self._delete(db, Item, node_id)

    # ── Statement helpers ─────────────────────────────────────────────────

    async def _insert_at_end(
        self,
        db: AsyncSession,
        model: Type[Base],
        parent_column: Optional[str],
        parent_id: Optional[int],
        values: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Insert a row positioned after its last sibling and return it.

        Siblings are all rows of the table for sections, and rows sharing
        the same parent id otherwise. With no siblings the position is 1.

        Returns:
            The inserted row as a dict of column name → value.
        """
        table = model.__table__
        siblings = table.alias("siblings")
        next_position = select(func.coalesce(func.max(siblings.c.position), 0) + 1)
        if parent_column is not None:
            next_position = next_position.where(siblings.c[parent_column] == parent_id)
            values = {**values, parent_column: parent_id}

        stmt = (
            insert(table)
            .values(**values, position=next_position.scalar_subquery())
            .returning(*table.c)
        )

        try:
            result = await db.execute(stmt)
            row = dict(result.mappings().one())
            await db.commit()
        except Exception as e:
            logger.error("Failed to create %s: %s", table.name, str(e))
            raise StoreOperationError.from_exception(e, operation=f"create {table.name}")

        logger.info("Created %s %s at position %s", table.name, row["id"], row["position"])
        return row

    async def _update(
        self,
        db: AsyncSession,
        model: Type[Base],
        node_id: int,
        payload: NodeUpdate,
    ) -> SuccessResponse:
        """Overwrite title and content; position and parent stay as they are."""
        table = model.__table__
        stmt = (
            update(table)
            .where(table.c.id == node_id)
            .values(title=payload.title, content=payload.content or "")
        )

        try:
            result = await db.execute(stmt)
            await db.commit()
        except Exception as e:
            logger.error("Failed to update %s %s: %s", table.name, node_id, str(e))
            raise StoreOperationError.from_exception(e, operation=f"update {table.name}")

        logger.info("Updated %s %s (%d row)", table.name, node_id, result.rowcount)
        return SuccessResponse()

    async def _delete(self, db: AsyncSession, model: Type[Base], node_id: int) -> SuccessResponse:
        table = model.__table__
        stmt = delete(table).where(table.c.id == node_id)

        try:
            result = await db.execute(stmt)
            await db.commit()
        except Exception as e:
            logger.error("Failed to delete %s %s: %s", table.name, node_id, str(e))
            raise StoreOperationError.from_exception(e, operation=f"delete {table.name}")

        logger.info("Deleted %s %s (%d row)", table.name, node_id, result.rowcount)
        return SuccessResponse()


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the store arrives with each call
outline_service = OutlineService()
