"""
Folio Hierarchy — Ordering helpers

Small pure functions shared by grouping, tree assembly and the reconciler.

Tie-breaking: every sort here is Python's stable sort keyed on `order` alone.
Entities with equal order keep their input order. That is the defined (weak)
total order of the engine; there is no secondary key.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from engine.hierarchy.types import OrderChange, OrderedEntity


def sort_by_order(entities: Iterable[OrderedEntity]) -> tuple[OrderedEntity, ...]:
    """Ascending by order, stable on ties."""
    return tuple(sorted(entities, key=lambda e: e.order))


def index_of(group: Sequence[OrderedEntity], entity_id: str) -> int:
    """Position of `entity_id` in `group`, or -1 when absent."""
    for i, entity in enumerate(group):
        if entity.id == entity_id:
            return i
    return -1


def changed_orders(group: Sequence[OrderedEntity]) -> tuple[OrderChange, ...]:
    """
    Entities whose position in `group` differs from their stored order.

    This is the minimal write set: untouched members whose stored value
    already matches their slot are left out.
    """
    return tuple(
        OrderChange(id=entity.id, order=position)
        for position, entity in enumerate(group)
        if entity.order != position
    )


def next_order(group: Sequence[OrderedEntity]) -> int:
    """Order index for an entity appended to `group` (its sibling count)."""
    return len(group)


def apply_changes(
    source: Iterable[OrderedEntity],
    changes: Iterable[OrderChange],
) -> tuple[OrderedEntity, ...]:
    """
    Apply a changed set to a full flat collection.

    Entities not named in `changes` are returned as-is, in source order.
    Changes naming ids absent from `source` are ignored.
    """
    new_orders = {c.id: c.order for c in changes}
    if not new_orders:
        return tuple(source)
    return tuple(
        entity.with_order(new_orders[entity.id]) if entity.id in new_orders else entity
        for entity in source
    )


def replace_entity(
    source: Iterable[OrderedEntity],
    entity: OrderedEntity,
) -> tuple[OrderedEntity, ...]:
    """Swap the member with `entity.id` for `entity`; unknown ids are ignored."""
    return tuple(entity if e.id == entity.id else e for e in source)


def remove_entity(source: Iterable[OrderedEntity], entity_id: str) -> tuple[OrderedEntity, ...]:
    return tuple(e for e in source if e.id != entity_id)
