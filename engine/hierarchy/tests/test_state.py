"""Tests for CollectionState: replacement, snapshot and id lookup."""

from __future__ import annotations

import pytest

from engine.hierarchy.state import CollectionState
from engine.hierarchy.tests.helpers import entity, ids


@pytest.fixture
def state(abcd):
    state = CollectionState(name="skills")
    state.commit_load(abcd)
    return state


class TestReplace:
    def test_version_bumps(self, state):
        before = state.version
        state.replace(state.entities[:2])
        assert state.version == before + 1
        assert isinstance(state.entities, tuple)

    def test_rollback_to_snapshot(self, state):
        loaded = state.entities
        state.replace(())
        state.rollback()
        assert state.entities == loaded

    def test_confirm_moves_snapshot(self, state):
        state.replace(state.entities[:1])
        state.confirm()
        state.replace(())
        state.rollback()
        assert ids(state.entities) == ["A"]


class TestMatch:
    @pytest.fixture
    def state(self):
        state = CollectionState(name="skills")
        state.commit_load([entity("python"), entity("pg"), entity("go")])
        return state

    def test_exact(self, state):
        assert state.match("go").id == "go"

    def test_unique_prefix(self, state):
        assert state.match("py").id == "python"

    def test_ambiguous_prefix(self, state):
        assert state.match("p") is None

    def test_empty_token(self, state):
        assert state.match("") is None

    def test_require_sets_error(self, state):
        assert state.require("zz") is None
        assert state.error == "Nothing in skills matches 'zz'."
        state.clear_error()
        assert state.error is None

    def test_require_ambiguous_names_candidates(self, state):
        assert state.require("p") is None
        assert state.error == "Several skills match 'p': python, pg."
