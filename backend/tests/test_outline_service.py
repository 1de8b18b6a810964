"""
Outliner Backend — Outline Service Unit Tests
===============================================

What:  Tests for OutlineService against a mocked AsyncSession.
How:   The session's execute() returns MagicMock results or raises
       SQLAlchemy errors; no real database is involved.

What we test:
    ✅ Created rows are returned as the matching row schema
    ✅ Writes commit; failed writes do not
    ✅ Store errors become StoreOperationError carrying the driver message
    ✅ Update and delete acknowledge even when no row matched
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from outliner.exceptions import StoreOperationError
from outliner.schemas.outline import (
    ItemCreate,
    NodeUpdate,
    SectionCreate,
    SectionRow,
    SubsectionCreate,
    SubsectionRow,
)
from outliner.services.outline_service import OutlineService


def _insert_result(row):
    result = MagicMock()
    result.mappings.return_value.one.return_value = row
    return result


class TestOutlineServiceCreate:
    """Tests for the create_* operations."""

    def setup_method(self):
        self.service = OutlineService()

    @pytest.mark.asyncio
    async def test_create_section_returns_row(self, mock_db_session):
        created_at = datetime.now(timezone.utc)
        mock_db_session.execute.return_value = _insert_result(
            {"id": 7, "title": "Intro", "content": "", "position": 3, "created_at": created_at}
        )

        row = await self.service.create_section(mock_db_session, SectionCreate(title="Intro"))

        assert isinstance(row, SectionRow)
        assert row.id == 7
        assert row.position == 3
        assert row.content == ""
        assert row.created_at == created_at
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_subsection_returns_parent_link(self, mock_db_session):
        mock_db_session.execute.return_value = _insert_result(
            {"id": 3, "section_id": 7, "title": "Scope", "content": "", "position": 1, "created_at": None}
        )

        row = await self.service.create_subsection(
            mock_db_session, SubsectionCreate(section_id=7, title="Scope")
        )

        assert isinstance(row, SubsectionRow)
        assert row.section_id == 7
        assert row.position == 1

    @pytest.mark.asyncio
    async def test_create_item_foreign_key_violation(self, mock_db_session):
        """A missing parent is only discovered by the store."""
        mock_db_session.execute.side_effect = IntegrityError(
            "INSERT INTO items ...", {}, Exception("FOREIGN KEY constraint failed")
        )

        with pytest.raises(StoreOperationError) as exc_info:
            await self.service.create_item(
                mock_db_session, ItemCreate(subsection_id=999, title="Orphan")
            )

        assert exc_info.value.message == "FOREIGN KEY constraint failed"
        assert exc_info.value.operation == "create items"
        mock_db_session.commit.assert_not_awaited()


class TestOutlineServiceUpdateDelete:
    """Tests for update_* and delete_*."""

    def setup_method(self):
        self.service = OutlineService()

    @pytest.mark.asyncio
    async def test_update_acknowledges(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        result = await self.service.update_section(
            mock_db_session, 1, NodeUpdate(title="New", content="Body")
        )

        assert result.success is True
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_missing_row_still_acknowledges(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        result = await self.service.update_item(mock_db_session, 404, NodeUpdate(title="x"))

        assert result.success is True

    @pytest.mark.asyncio
    async def test_delete_acknowledges(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        result = await self.service.delete_subsection(mock_db_session, 3)

        assert result.success is True
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_connection_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "DELETE FROM sections ...", {}, Exception("connection refused")
        )

        with pytest.raises(StoreOperationError, match="connection refused"):
            await self.service.delete_section(mock_db_session, 1)

    @pytest.mark.asyncio
    async def test_unwrapped_driver_error(self, mock_db_session):
        """Driver errors SQLAlchemy passes through untouched are wrapped too."""
        mock_db_session.execute.side_effect = OverflowError(
            "Python int too large to convert to SQLite INTEGER"
        )

        with pytest.raises(StoreOperationError) as exc_info:
            await self.service.update_section(mock_db_session, 2**70, NodeUpdate(title="x"))

        assert "too large" in exc_info.value.message
        assert exc_info.value.operation == "update sections"
        mock_db_session.commit.assert_not_awaited()


class TestOutlineServiceTree:
    """Tests for get_tree."""

    def setup_method(self):
        self.service = OutlineService()

    @pytest.mark.asyncio
    async def test_get_tree_assembles_rows(self, mock_db_session):
        result = MagicMock()
        result.mappings.return_value.all.return_value = [
            {
                "section_id": 1, "section_title": "A", "section_content": "", "section_position": 1,
                "subsection_id": None, "subsection_title": None,
                "subsection_content": None, "subsection_position": None,
                "item_id": None, "item_title": None, "item_content": None, "item_position": None,
            }
        ]
        mock_db_session.execute.return_value = result

        tree = await self.service.get_tree(mock_db_session)

        assert len(tree.sections) == 1
        assert tree.sections[0].subsections == []

    @pytest.mark.asyncio
    async def test_get_tree_missing_table(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT ...", {}, Exception("no such table: sections")
        )

        with pytest.raises(StoreOperationError, match="no such table"):
            await self.service.get_tree(mock_db_session)
