"""
Folio Hierarchy — the ordered collection engine.

Components:
  grouping    — flat collection → sibling groups keyed by category
  tree        — flat parent-referencing nodes → ordered forest
  reorder     — drag move → new group + minimal changed set (pure)
  reconciler  — optimistic local write, concurrent remote sync, reload on failure

Collaborator is the only door to persistence; MemoryCollection backs tests.
"""

from engine.hierarchy.collaborator import Collaborator, MemoryCollection
from engine.hierarchy.grouping import SiblingGrouper, group_siblings, siblings
from engine.hierarchy.reconciler import OrderReconciler
from engine.hierarchy.reorder import array_move, move_to_position, reorder, reorder_by_id
from engine.hierarchy.state import CollectionState
from engine.hierarchy.tree import Forest, TreeAssembler, assemble, find_cycle
from engine.hierarchy.types import (
    UNCATEGORIZED,
    CallOutcome,
    OrderChange,
    OrderedEntity,
    ReconcileReport,
    ReorderResult,
    StructuralError,
)

__all__ = [
    "Collaborator",
    "MemoryCollection",
    "group_siblings",
    "siblings",
    "SiblingGrouper",
    "assemble",
    "find_cycle",
    "Forest",
    "TreeAssembler",
    "array_move",
    "reorder",
    "reorder_by_id",
    "move_to_position",
    "OrderReconciler",
    "CollectionState",
    "UNCATEGORIZED",
    "OrderedEntity",
    "OrderChange",
    "ReorderResult",
    "CallOutcome",
    "ReconcileReport",
    "StructuralError",
]
