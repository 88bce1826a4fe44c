"""
Folio Hierarchy — Sibling grouping

Partitions a flat collection into sibling groups keyed by parent/category.

  group_siblings(entities, group_keys) → {key: (entity, ...), "uncategorized": (...)}

Known keys pre-seed empty buckets so categories with no members still render.
Anything whose parent is null or not a known key lands in the reserved
UNCATEGORIZED bucket. Each bucket is sorted by order (stable).

Pure. Recomputed whenever the source collection or the key set changes;
SiblingGrouper only memoizes the last answer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from engine.hierarchy.ordering import sort_by_order
from engine.hierarchy.types import UNCATEGORIZED, OrderedEntity

Groups = Mapping[str, tuple[OrderedEntity, ...]]


def group_siblings(
    entities: Iterable[OrderedEntity],
    group_keys: Iterable[str],
) -> Groups:
    """
    Bucket `entities` by parent key.

    Iteration order of the result: known keys as given, then UNCATEGORIZED.
    Every input entity appears in exactly one bucket.
    """
    buckets: dict[str, list[OrderedEntity]] = {key: [] for key in group_keys}
    buckets.setdefault(UNCATEGORIZED, [])

    for entity in entities:
        key = entity.parent_key
        if key is not None and key != UNCATEGORIZED and key in buckets:
            buckets[key].append(entity)
        else:
            buckets[UNCATEGORIZED].append(entity)

    # Keep the sentinel last even if a caller passed it as a known key.
    uncategorized = buckets.pop(UNCATEGORIZED)
    grouped = {key: sort_by_order(members) for key, members in buckets.items()}
    grouped[UNCATEGORIZED] = sort_by_order(uncategorized)
    return MappingProxyType(grouped)


def siblings(
    entities: Iterable[OrderedEntity],
    key: str | None,
    group_keys: Sequence[str] | None = None,
) -> tuple[OrderedEntity, ...]:
    """
    The sorted sibling group for a single key.

    With `group_keys` (grouped collections) the UNCATEGORIZED key, None, or
    any unknown key selects everything whose parent is null or unknown.
    Without it (trees) the match on parent_key is exact, so None selects the
    roots.
    """
    if group_keys is None:
        return sort_by_order(e for e in entities if e.parent_key == key)

    known = set(group_keys)
    known.discard(UNCATEGORIZED)
    if key in known:
        return sort_by_order(e for e in entities if e.parent_key == key)
    return sort_by_order(e for e in entities if e.parent_key is None or e.parent_key not in known)


class SiblingGrouper:
    """
    Memoizing front for group_siblings().

    The cache is invalidated when the entity collection is a different object
    (identity) or the key set differs (value). Callers hand in immutable
    tuples, so identity is a sound version check.
    """

    def __init__(self) -> None:
        self._source: object | None = None
        self._keys: tuple[str, ...] | None = None
        self._groups: Groups | None = None

    def group(self, entities: Sequence[OrderedEntity], group_keys: Iterable[str]) -> Groups:
        keys = tuple(group_keys)
        if self._groups is not None and entities is self._source and keys == self._keys:
            return self._groups
        self._groups = group_siblings(entities, keys)
        self._source = entities
        self._keys = keys
        return self._groups

    def invalidate(self) -> None:
        self._source = None
        self._keys = None
        self._groups = None
