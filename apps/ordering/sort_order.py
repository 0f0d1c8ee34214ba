"""
Sort-order maintenance for sibling entities.

Projects (globally), sections (within a project) and tasks (within a
section) are ordered by an integer sort_order. These helpers work on plain
sibling lists; they never touch the database.

Rules:
- New items are appended at max(sort_order) + 1 (0 for an empty parent)
- A same-parent reorder renumbers the whole list densely as 0..n-1
- A cross-parent move only changes the moved item's parent; no sibling in
  either list is renumbered, so gaps (and duplicate keys in the target
  parent) are allowed and readers must always sort by sort_order
"""

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

# Range of the integer sort_order column
SORT_ORDER_MIN = -2147483648
SORT_ORDER_MAX = 2147483647


@dataclass(frozen=True)
class SortKey:
    """An (id, sort_order) pair, the unit the reorder endpoint persists."""
    id: str
    sort_order: int

    def as_payload(self):
        return {'id': self.id, 'sortOrder': self.sort_order}


def next_sort_order(siblings) -> int:
    """
    Sort order for an item appended to a parent.

    Returns max(sort_order) + 1, or 0 when the parent has no children.
    """
    orders = [item.sort_order for item in siblings]
    if not orders:
        return 0
    return max(orders) + 1


def _with_sort_order(item, sort_order):
    """Return item itself when already at sort_order, else a renumbered copy."""
    if item.sort_order == sort_order:
        return item
    if dataclasses.is_dataclass(item):
        return dataclasses.replace(item, sort_order=sort_order)
    clone = copy.copy(item)
    clone.sort_order = sort_order
    return clone


def reorder(siblings: Sequence, from_index: int, to_index: int) -> list:
    """
    Move the item at from_index to to_index and renumber densely.

    to_index is clamped to the valid range. Moving an item onto its own
    position (or reordering fewer than two items) returns the siblings
    unchanged without renumbering. Items that already sit at their new
    key are returned as the same objects.

    Raises:
        IndexError: If from_index does not address an item
    """
    items = list(siblings)
    if len(items) < 2:
        return items

    if not 0 <= from_index < len(items):
        raise IndexError(f'from_index {from_index} out of range for {len(items)} items')

    to_index = max(0, min(to_index, len(items) - 1))
    if from_index == to_index:
        return items

    moved = items.pop(from_index)
    items.insert(to_index, moved)

    return [_with_sort_order(item, index) for index, item in enumerate(items)]


def dense_keys(siblings) -> List[SortKey]:
    """(id, sort_order) pairs for every sibling, in list order."""
    return [SortKey(id=str(item.id), sort_order=item.sort_order) for item in siblings]


def index_of(siblings, item_id) -> int:
    """Position of item_id in siblings, or -1."""
    for index, item in enumerate(siblings):
        if str(item.id) == str(item_id):
            return index
    return -1


def move_across(source: Sequence, dest: Sequence, item_id, over_id=None):
    """
    Splice an item out of one parent's list into another's.

    The item is inserted at the position of over_id in dest, or appended
    when over_id is missing from dest (a drop on the container itself).
    Neither list is renumbered.

    Returns:
        (remaining source list, new dest list)

    Raises:
        KeyError: If item_id is not in source
    """
    remaining = list(source)
    position = index_of(remaining, item_id)
    if position < 0:
        raise KeyError(item_id)
    moved = remaining.pop(position)

    target = list(dest)
    over_index = index_of(target, over_id) if over_id is not None else -1
    if over_index >= 0:
        target.insert(over_index, moved)
    else:
        target.append(moved)

    return remaining, target


# =============================================================================
# Drop planning (drag end)
# =============================================================================

class DropKind:
    NOOP = 'noop'
    REORDER = 'reorder'
    TRANSFER = 'transfer'


@dataclass
class DropPlan:
    """
    Outcome of a drag end over a board of sections.

    kind:
        noop     - nothing changes, nothing is persisted
        reorder  - same section; updates holds the dense keys of every sibling
        transfer - different section; only the moved item's parent changes
    sections: the optimistic board, section id -> ordered siblings
    """
    kind: str
    item_id: Optional[str] = None
    source_id: Optional[str] = None
    dest_id: Optional[str] = None
    sections: Dict[str, list] = field(default_factory=dict)
    updates: List[SortKey] = field(default_factory=list)

    @property
    def is_noop(self):
        return self.kind == DropKind.NOOP


def section_of(sections: Mapping[str, Sequence], item_id) -> Optional[str]:
    """Id of the section whose list contains item_id."""
    for section_id, siblings in sections.items():
        if index_of(siblings, item_id) >= 0:
            return section_id
    return None


def plan_drop(sections: Mapping[str, Sequence], active_id, over_id) -> DropPlan:
    """
    Work out what a drop of active_id onto over_id does.

    over_id may be a task (drop onto a card) or a section (drop onto the
    column, e.g. an empty one). Unknown ids produce a no-op plan.
    """
    active_id = str(active_id)
    over_id = str(over_id) if over_id is not None else None
    board = {str(section_id): list(siblings) for section_id, siblings in sections.items()}

    source_id = section_of(board, active_id)
    if source_id is None or over_id is None:
        return DropPlan(kind=DropKind.NOOP, sections=board)

    dest_id = over_id if over_id in board else section_of(board, over_id)
    if dest_id is None:
        return DropPlan(kind=DropKind.NOOP, sections=board)

    if source_id == dest_id:
        siblings = board[source_id]
        from_index = index_of(siblings, active_id)
        to_index = index_of(siblings, over_id)
        if to_index < 0:
            to_index = len(siblings) - 1
        if from_index == to_index:
            return DropPlan(kind=DropKind.NOOP, item_id=active_id, source_id=source_id,
                            dest_id=dest_id, sections=board)

        reordered = reorder(siblings, from_index, to_index)
        board[source_id] = reordered
        return DropPlan(
            kind=DropKind.REORDER,
            item_id=active_id,
            source_id=source_id,
            dest_id=dest_id,
            sections=board,
            updates=dense_keys(reordered),
        )

    remaining, target = move_across(board[source_id], board[dest_id], active_id, over_id)
    board[source_id] = remaining
    board[dest_id] = target
    return DropPlan(
        kind=DropKind.TRANSFER,
        item_id=active_id,
        source_id=source_id,
        dest_id=dest_id,
        sections=board,
    )
