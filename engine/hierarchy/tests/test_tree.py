"""
Tree assembly tests (project content outlines).

Tests verify:
  - roots and children sort by order, ties keep input order
  - children_of() of leaves and unknown ids is empty
  - orphans are dropped from roots and every children list
  - walk() is pre-order and covers a well-formed forest exactly once
  - cycles raise StructuralError instead of looping
"""

from __future__ import annotations

import pytest

from engine.hierarchy.tests.helpers import entity, ids
from engine.hierarchy.tree import TreeAssembler, assemble, find_cycle
from engine.hierarchy.types import StructuralError


def make_outline():
    """
    intro(0)
      motivation(1)
      goals(0)
        goal_a(0)
    design(1)
      api(0)
    """
    return [
        entity("design", None, 1),
        entity("motivation", "intro", 1),
        entity("intro", None, 0),
        entity("goal_a", "goals", 0),
        entity("goals", "intro", 0),
        entity("api", "design", 0),
    ]


class TestRootsAndChildren:
    def test_roots_sorted(self):
        forest = assemble(make_outline())

        assert ids(forest.roots) == ["intro", "design"]

    def test_children_sorted(self):
        forest = assemble(make_outline())

        assert ids(forest.children_of("intro")) == ["goals", "motivation"]
        assert ids(forest.children_of("goals")) == ["goal_a"]

    def test_leaf_has_no_children(self):
        forest = assemble(make_outline())

        assert forest.children_of("api") == ()

    def test_unknown_id_has_no_children(self):
        forest = assemble(make_outline())

        assert forest.children_of("nope") == ()

    def test_ties_keep_input_order(self):
        nodes = [entity("x"), entity("c2", "x", 0), entity("c1", "x", 0)]

        assert ids(assemble(nodes).children_of("x")) == ["c2", "c1"]

    def test_empty(self):
        forest = assemble([])

        assert forest.roots == ()
        assert forest.flatten() == []


class TestOrphans:
    def test_orphan_dropped_from_roots_and_children(self):
        nodes = make_outline() + [entity("stray", "ghost", 0)]

        forest = assemble(nodes)

        assert "stray" not in ids(forest.roots)
        for node in nodes:
            assert "stray" not in ids(forest.children_of(node.id))
        assert forest.children_of("ghost") == ()
        assert ids(forest.orphans) == ["stray"]

    def test_orphan_descendants_are_detached(self):
        nodes = make_outline() + [entity("stray", "ghost", 0), entity("stray_kid", "stray", 0)]

        forest = assemble(nodes)

        assert ids(forest.detached) == ["stray_kid"]
        assert "stray_kid" not in ids(forest.flatten())


class TestWalk:
    def test_pre_order_with_depth(self):
        forest = assemble(make_outline())

        walked = [(depth, node.id) for depth, node in forest.walk()]

        assert walked == [
            (0, "intro"),
            (1, "goals"),
            (2, "goal_a"),
            (1, "motivation"),
            (0, "design"),
            (1, "api"),
        ]

    def test_forest_covers_every_node_once(self):
        nodes = make_outline()

        flat = ids(assemble(nodes).flatten())

        assert sorted(flat) == sorted(ids(nodes))
        assert len(flat) == len(set(flat))

    def test_walk_below_a_node(self):
        forest = assemble(make_outline())

        assert [n.id for _, n in forest.walk(start="intro")] == ["goals", "goal_a", "motivation"]

    def test_max_depth(self):
        nodes = [entity("n0")] + [entity(f"n{i}", f"n{i - 1}") for i in range(1, 6)]
        forest = assemble(nodes)

        with pytest.raises(StructuralError):
            list(forest.walk(max_depth=3))


class TestCycles:
    def test_cycle_members_are_detached(self):
        nodes = [entity("root"), entity("a", "b"), entity("b", "a")]

        forest = assemble(nodes)

        assert ids(forest.roots) == ["root"]
        assert sorted(ids(forest.detached)) == ["a", "b"]
        assert ids(forest.flatten()) == ["root"]

    def test_walk_into_cycle_raises(self):
        forest = assemble([entity("a", "b"), entity("b", "a")])

        with pytest.raises(StructuralError):
            list(forest.walk(start="a"))

    def test_self_parent_raises_on_walk(self):
        forest = assemble([entity("a", "a")])

        with pytest.raises(StructuralError):
            list(forest.walk(start="a"))

    def test_strict_assemble_raises(self):
        with pytest.raises(StructuralError):
            assemble([entity("a", "c"), entity("b", "a"), entity("c", "b")], strict=True)

    def test_strict_accepts_forest(self):
        assert ids(assemble(make_outline(), strict=True).roots) == ["intro", "design"]

    def test_find_cycle(self):
        cycle = find_cycle([entity("r"), entity("a", "c"), entity("b", "a"), entity("c", "b")])

        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"a", "b", "c"}

    def test_find_cycle_none(self):
        assert find_cycle(make_outline() + [entity("stray", "ghost")]) == []


class TestTreeAssembler:
    def test_memoizes_by_identity(self):
        assembler = TreeAssembler()
        nodes = tuple(make_outline())

        assert assembler.assemble(nodes) is assembler.assemble(nodes)

    def test_new_collection_reassembles(self):
        assembler = TreeAssembler()
        nodes = tuple(make_outline())

        first = assembler.assemble(nodes)
        second = assembler.assemble(nodes[:-1])

        assert first is not second
        assert second.children_of("design") == ()
