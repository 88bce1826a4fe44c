"""
Folio Hierarchy — Tree assembly

Turns a flat list of parent-referencing nodes (project content blocks) into a
forest:

  assemble(nodes) → Forest(roots, children_of(id), orphans, detached)

Rules:
  - roots are nodes with no parent, ascending by order (stable)
  - children_of(id) is every node whose parent is `id`, sorted the same way;
    unknown ids and leaves give an empty tuple
  - orphans (parent id not in the collection) are dropped: they appear in
    neither roots nor any children_of() result, only in Forest.orphans
  - nothing here recurses; walk() is iterative, keeps a visited set and
    raises StructuralError instead of looping on a parent cycle

Children are bucketed in one pass and each bucket is stable-sorted, which
gives the same answer as scanning the whole list per call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from engine.hierarchy.ordering import sort_by_order
from engine.hierarchy.types import OrderedEntity, StructuralError

logger = logging.getLogger(__name__)

# Depth cap for walk(). Content outlines are a handful of levels deep.
DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class Forest:
    """Immutable result of assemble()."""

    roots: tuple[OrderedEntity, ...] = ()
    children: Mapping[str, tuple[OrderedEntity, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    orphans: tuple[OrderedEntity, ...] = ()
    detached: tuple[OrderedEntity, ...] = ()

    def children_of(self, parent_id: str) -> tuple[OrderedEntity, ...]:
        return self.children.get(parent_id, ())

    def walk(
        self,
        start: str | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> Iterator[tuple[int, OrderedEntity]]:
        """
        Depth-first pre-order traversal yielding (depth, node).

        Starts at the roots, or below node `start` when given (the start
        node itself is not yielded). A node seen twice means the parent
        references loop; that raises StructuralError, as does going deeper
        than `max_depth`.
        """
        first = self.roots if start is None else self.children_of(start)
        visited: set[str] = set() if start is None else {start}
        stack: list[tuple[int, OrderedEntity]] = [(0, node) for node in reversed(first)]

        while stack:
            depth, node = stack.pop()
            if node.id in visited:
                raise StructuralError(f"parent cycle through node {node.id!r}")
            if depth > max_depth:
                raise StructuralError(f"tree deeper than {max_depth} levels at node {node.id!r}")
            visited.add(node.id)
            yield depth, node
            for child in reversed(self.children_of(node.id)):
                stack.append((depth + 1, child))

    def flatten(self) -> list[OrderedEntity]:
        """All reachable nodes in render order."""
        return [node for _, node in self.walk()]


def assemble(nodes: Sequence[OrderedEntity], strict: bool = False) -> Forest:
    """
    Build a Forest from a flat node list.

    With strict=True a parent cycle raises StructuralError; otherwise cycle
    members are absorbed into Forest.detached like any other node that no
    root can reach.
    """
    ids = {node.id for node in nodes}

    root_nodes: list[OrderedEntity] = []
    buckets: dict[str, list[OrderedEntity]] = {}
    orphans: list[OrderedEntity] = []

    for node in nodes:
        parent = node.parent_key
        if parent is None:
            root_nodes.append(node)
        elif parent in ids:
            buckets.setdefault(parent, []).append(node)
        else:
            orphans.append(node)

    if orphans:
        logger.debug(
            "tree: dropping %d orphan node(s): %s",
            len(orphans),
            ", ".join(o.id for o in orphans),
        )

    if strict:
        cycle = find_cycle(nodes)
        if cycle:
            raise StructuralError(f"parent cycle: {' -> '.join(cycle)}")

    forest = Forest(
        roots=sort_by_order(root_nodes),
        children=MappingProxyType({pid: sort_by_order(kids) for pid, kids in buckets.items()}),
        orphans=tuple(orphans),
    )

    reachable = _reachable_ids(forest, len(nodes))
    orphan_ids = {o.id for o in orphans}
    detached = tuple(n for n in nodes if n.id not in reachable and n.id not in orphan_ids)
    return Forest(
        roots=forest.roots,
        children=forest.children,
        orphans=forest.orphans,
        detached=detached,
    )


def find_cycle(nodes: Sequence[OrderedEntity]) -> list[str]:
    """
    Return the ids of one parent cycle (first id repeated at the end), or []
    when parent references are acyclic.
    """
    parent_of = {node.id: node.parent_key for node in nodes}
    done: set[str] = set()

    for node in nodes:
        path: list[str] = []
        on_path: set[str] = set()
        current: str | None = node.id
        while current is not None and current in parent_of and current not in done:
            if current in on_path:
                start = path.index(current)
                return path[start:] + [current]
            path.append(current)
            on_path.add(current)
            current = parent_of[current]
        done.update(path)
    return []


def _reachable_ids(forest: Forest, limit: int) -> set[str]:
    # Walking from the roots never meets a cycle: a cycle member's ancestors
    # never reach a parentless node.
    return {node.id for _, node in forest.walk(max_depth=limit)}


class TreeAssembler:
    """
    Memoizing front for assemble().

    Re-assembles only when handed a different node collection (identity).
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._source: object | None = None
        self._forest: Forest | None = None

    def assemble(self, nodes: Sequence[OrderedEntity]) -> Forest:
        if self._forest is not None and nodes is self._source:
            return self._forest
        self._forest = assemble(nodes, strict=self.strict)
        self._source = nodes
        return self._forest

    def invalidate(self) -> None:
        self._source = None
        self._forest = None
