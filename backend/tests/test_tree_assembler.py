"""
Outliner Backend — Tree Assembler Unit Tests
==============================================

What:  Tests for assemble_tree() on hand-built join rows.
How:   Rows are plain dicts shaped like the outer-join result; no database.

What we test:
    ✅ Childless sections and subsections get empty lists
    ✅ NULL child ids are skipped, id 0 is still a child
    ✅ Output order equals input order (no re-sorting)
"""

from outliner.services.tree_assembler import assemble_tree


def _row(section, subsection=None, item=None):
    """Build one join row from (id, title, content, position) tuples."""
    row = {}
    for prefix, values in (("section", section), ("subsection", subsection), ("item", item)):
        values = values or (None, None, None, None)
        row[f"{prefix}_id"], row[f"{prefix}_title"], row[f"{prefix}_content"], row[f"{prefix}_position"] = values
    return row


class TestAssembleTree:
    """Tests for the flat-rows → nested-tree reshaping."""

    def test_no_rows(self):
        assert assemble_tree([]) == []

    def test_section_without_subsections(self):
        rows = [_row((1, "Intro", "", 1))]

        tree = assemble_tree(rows)

        assert len(tree) == 1
        assert tree[0].id == 1
        assert tree[0].title == "Intro"
        assert tree[0].subsections == []

    def test_subsection_without_items(self):
        rows = [_row((1, "Intro", "", 1), (10, "Scope", "text", 1))]

        tree = assemble_tree(rows)

        assert len(tree[0].subsections) == 1
        assert tree[0].subsections[0].id == 10
        assert tree[0].subsections[0].content == "text"
        assert tree[0].subsections[0].items == []

    def test_full_nesting(self):
        rows = [
            _row((1, "A", "", 1), (10, "A.1", "", 1), (100, "A.1.a", "x", 1)),
            _row((1, "A", "", 1), (10, "A.1", "", 1), (101, "A.1.b", "y", 2)),
            _row((1, "A", "", 1), (11, "A.2", "", 2), (102, "A.2.a", "", 1)),
            _row((2, "B", "", 2)),
        ]

        tree = assemble_tree(rows)

        assert [s.id for s in tree] == [1, 2]
        assert [ss.id for ss in tree[0].subsections] == [10, 11]
        assert [i.id for i in tree[0].subsections[0].items] == [100, 101]
        assert [i.title for i in tree[0].subsections[0].items] == ["A.1.a", "A.1.b"]
        assert [i.id for i in tree[0].subsections[1].items] == [102]
        assert tree[1].subsections == []

    def test_order_follows_input_not_position(self):
        """Rows arrive pre-sorted; the assembler must not sort them again."""
        rows = [
            _row((5, "Second by id", "", 1)),
            _row((2, "First by id", "", 7)),
        ]

        tree = assemble_tree(rows)

        assert [s.id for s in tree] == [5, 2]

    def test_zero_ids_are_real_children(self):
        rows = [_row((1, "A", "", 1), (0, "Zero", "", 1), (0, "Zero item", "", 1))]

        tree = assemble_tree(rows)

        assert tree[0].subsections[0].id == 0
        assert tree[0].subsections[0].items[0].id == 0

    def test_item_positions_are_carried_through(self):
        rows = [
            _row((1, "A", "", 1), (10, "A.1", "", 1), (100, "first", "", 1)),
            _row((1, "A", "", 1), (10, "A.1", "", 1), (101, "after gap", "", 4)),
        ]

        items = assemble_tree(rows)[0].subsections[0].items

        assert [i.position for i in items] == [1, 4]

    def test_serializes_to_api_shape(self):
        rows = [_row((1, "A", None, 1), (10, "A.1", "", 1), (100, "A.1.a", "", 1))]

        data = assemble_tree(rows)[0].model_dump()

        assert data == {
            "id": 1,
            "title": "A",
            "content": None,
            "position": 1,
            "subsections": [
                {
                    "id": 10,
                    "title": "A.1",
                    "content": "",
                    "position": 1,
                    "items": [{"id": 100, "title": "A.1.a", "content": "", "position": 1}],
                }
            ],
        }
