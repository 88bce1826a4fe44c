"""
Hierarchy engine test configuration.

Engine tests use MemoryCollection and function-scoped event loops.
"""

from __future__ import annotations

import pytest

from engine.hierarchy.tests.helpers import entity


@pytest.fixture
def abcd():
    """Four siblings A..D at orders 0..3 in category "lang"."""
    return [entity(name, "lang", i, name=name) for i, name in enumerate("ABCD")]
