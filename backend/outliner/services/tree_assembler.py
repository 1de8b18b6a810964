"""
Outliner Backend — Tree Assembler
===================================

What:  Reshapes the flat rows of the sections/subsections/items outer join
       into nested SectionNode → SubsectionNode → ItemNode records.
How:   One linear pass. Sections and, per section, subsections are
       accumulated in insertion-ordered dicts keyed by id; items are appended
       to their subsection. The dicts become lists at the end.
Who:   Called by OutlineService.get_tree().

Input row keys:
    section_id, section_title, section_content, section_position,
    subsection_id, subsection_title, subsection_content, subsection_position,
    item_id, item_title, item_content, item_position

A LEFT JOIN pads missing children with NULLs, so a None subsection_id or
item_id means "no child here".

Ordering is whatever the query produced. Nothing is re-sorted in memory.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from outliner.schemas.outline import ItemNode, SectionNode, SubsectionNode


@dataclass
class _SubsectionDraft:
    node: SubsectionNode
    items: List[ItemNode] = field(default_factory=list)


@dataclass
class _SectionDraft:
    node: SectionNode
    subsections: Dict[int, _SubsectionDraft] = field(default_factory=dict)


def assemble_tree(rows: Iterable[Mapping[str, Any]]) -> List[SectionNode]:
    """
    Build the nested outline from joined rows.

    Args:
        rows: Joined rows, already ordered by section, subsection and item
              position.

    Returns:
        Sections in first-seen order, each with its subsections and items
        in first-seen order. Childless nodes get empty lists.
    """
    sections: Dict[int, _SectionDraft] = {}

    for row in rows:
        section_id = row["section_id"]
        section = sections.get(section_id)
        if section is None:
            section = _SectionDraft(
                node=SectionNode(
                    id=section_id,
                    title=row["section_title"],
                    content=row["section_content"],
                    position=row["section_position"],
                )
            )
            sections[section_id] = section

        subsection_id = row["subsection_id"]
        if subsection_id is None:
            continue

        subsection = section.subsections.get(subsection_id)
        if subsection is None:
            subsection = _SubsectionDraft(
                node=SubsectionNode(
                    id=subsection_id,
                    title=row["subsection_title"],
                    content=row["subsection_content"],
                    position=row["subsection_position"],
                )
            )
            section.subsections[subsection_id] = subsection

        if row["item_id"] is not None:
            subsection.items.append(
                ItemNode(
                    id=row["item_id"],
                    title=row["item_title"],
                    content=row["item_content"],
                    position=row["item_position"],
                )
            )

    return [_finish_section(draft) for draft in sections.values()]


def _finish_section(draft: _SectionDraft) -> SectionNode:
    subsections = [
        sub.node.model_copy(update={"items": sub.items})
        for sub in draft.subsections.values()
    ]
    return draft.node.model_copy(update={"subsections": subsections})
