"""Builders shared by the hierarchy tests."""

from __future__ import annotations

from engine.hierarchy.types import OrderedEntity


def entity(entity_id: str, parent_key: str | None = None, order: int = 0, **payload) -> OrderedEntity:
    return OrderedEntity(id=entity_id, parent_key=parent_key, order=order, payload=payload)


def ids(entities) -> list[str]:
    return [e.id for e in entities]
