"""
Folio Hierarchy — Reorder

Pure drag-reorder recomputation for one sibling group.

  reorder(group, from_index, to_index) → ReorderResult(group, changed)

Array-move semantics: the entity at from_index is removed and reinserted at
to_index, so every member between the two slots shifts by one. `changed`
is every member whose new position differs from its stored order, not just
the one that was dragged.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from engine.hierarchy.ordering import changed_orders, index_of
from engine.hierarchy.types import OrderedEntity, ReorderResult

T = TypeVar("T")


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Return a copy of `items` with one element moved from one slot to another."""
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


def reorder(group: Sequence[OrderedEntity], from_index: int, to_index: int) -> ReorderResult:
    """
    Move group[from_index] to to_index.

    No-op (original group, empty changed) when the indices are equal or
    either is out of range.
    """
    original = tuple(group)
    size = len(original)
    if from_index == to_index or not (0 <= from_index < size) or not (0 <= to_index < size):
        return ReorderResult(group=original)

    moved = array_move(original, from_index, to_index)
    changed = changed_orders(moved)
    new_orders = {c.id: c.order for c in changed}
    new_group = tuple(
        entity.with_order(new_orders[entity.id]) if entity.id in new_orders else entity
        for entity in moved
    )
    return ReorderResult(group=new_group, changed=changed)


def reorder_by_id(group: Sequence[OrderedEntity], active_id: str, over_id: str) -> ReorderResult:
    """
    Move the entity `active_id` into the slot currently held by `over_id`.

    Both positions are resolved against `group` as it is now, so a reload
    that landed between drag start and drop cannot skew the move. Missing
    ids make this a no-op.
    """
    from_index = index_of(group, active_id)
    to_index = index_of(group, over_id)
    if from_index == -1 or to_index == -1:
        return ReorderResult(group=tuple(group))
    return reorder(group, from_index, to_index)


def move_to_position(group: Sequence[OrderedEntity], entity_id: str, position: int) -> ReorderResult:
    """
    Move `entity_id` to an absolute position, clamped into the group.
    """
    if not group:
        return ReorderResult(group=())
    target = max(0, min(position, len(group) - 1))
    return reorder_by_id(group, entity_id, group[target].id)
