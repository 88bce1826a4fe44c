"""
Folio Hierarchy — Shared Types

Data classes used across grouping, tree assembly, reorder and the reconciler.
These are the contracts that bind the hierarchy engine together.

Key ideas:
- `OrderedEntity` is the one shape every collection is read into. Skills,
  categories, project contents, careers and certifications all become
  OrderedEntity tuples before the engine touches them.
- `parent_key` is a category id for grouped collections and a parent node id
  for trees.
- `order` is a serialization of position within a sibling group, not an
  identity. Position in the sorted group is what counts.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Reserved bucket for entities with no (or an unknown) group key.
UNCATEGORIZED = "uncategorized"

# Canonical payload keys for the structural fields. Collaborators translate
# these to their wire names.
PARENT_KEY = "parent_key"
ORDER_KEY = "order"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class StructuralError(ValueError):
    """Parent references do not form a forest (cycle or runaway depth)."""

    pass


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderedEntity:
    """
    One record of an ordered collection.

    payload holds every wire field other than id / parent / order, so a
    full-replace update can be rebuilt from the entity alone.
    """

    id: str
    parent_key: str | None = None
    order: int = 0
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the payload so derived structures can share entities safely.
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def __hash__(self) -> int:
        # payload is a mappingproxy, which cannot be hashed; id is the identity.
        return hash(self.id)

    def with_order(self, order: int) -> OrderedEntity:
        if order == self.order:
            return self
        return replace(self, order=order)

    def with_parent(self, parent_key: str | None) -> OrderedEntity:
        return replace(self, parent_key=parent_key)

    def with_fields(self, **fields: Any) -> OrderedEntity:
        """Copy with payload fields overridden."""
        return replace(self, payload={**self.payload, **fields})

    def as_payload(self) -> dict[str, Any]:
        """Full payload for a replace-style update (canonical keys)."""
        data = dict(self.payload)
        data[PARENT_KEY] = self.parent_key
        data[ORDER_KEY] = self.order
        return data

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.as_payload()}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> OrderedEntity:
        payload = {k: v for k, v in d.items() if k not in ("id", PARENT_KEY, ORDER_KEY)}
        return cls(
            id=str(d["id"]),
            parent_key=d.get(PARENT_KEY),
            order=int(d.get(ORDER_KEY) or 0),
            payload=payload,
        )


@dataclass(frozen=True)
class OrderChange:
    """A single member of a changed set: entity `id` now sits at `order`."""

    id: str
    order: int


@dataclass(frozen=True)
class ReorderResult:
    """
    Result of a reorder gesture.

    `group` is the sibling group in its new order, each member carrying its
    new order value. `changed` lists only entities whose stored order moved.
    A no-op returns the original group and an empty `changed`.
    """

    group: tuple[OrderedEntity, ...]
    changed: tuple[OrderChange, ...] = ()

    @property
    def is_noop(self) -> bool:
        return not self.changed

    def changed_map(self) -> dict[str, int]:
        return {c.id: c.order for c in self.changed}


@dataclass(frozen=True)
class CallOutcome:
    """
    Result of one remote call, as a value rather than a raised exception.
    """

    entity_id: str | None
    ok: bool
    error: BaseException | None = None

    @classmethod
    def success(cls, entity_id: str | None) -> CallOutcome:
        return cls(entity_id=entity_id, ok=True)

    @classmethod
    def failure(cls, entity_id: str | None, error: BaseException) -> CallOutcome:
        return cls(entity_id=entity_id, ok=False, error=error)


@dataclass
class ReconcileReport:
    """Aggregate of a reconciliation: what was written and how it settled."""

    changed: tuple[OrderChange, ...] = ()
    outcomes: list[CallOutcome] = field(default_factory=list)
    reloaded: bool = False
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def failures(self) -> list[CallOutcome]:
        return [o for o in self.outcomes if not o.ok]
