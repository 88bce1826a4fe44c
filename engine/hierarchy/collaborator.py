"""
Folio Hierarchy — Remote collaborator contract

The engine reaches persistence only through this narrow interface, one
instance per entity kind. Implement with the HTTP API for production
(console.services.collections.RemoteCollection) or in memory for tests.

Payloads use canonical keys: `parent_key` and `order` plus whatever other
fields the kind carries. update() is a full replace, never a patch.
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping
from typing import Any

from engine.hierarchy.types import ORDER_KEY, PARENT_KEY, OrderedEntity


class Collaborator:
    """
    Abstract remote collection.
    The engine never generates ids; create() returns the server's entity.
    """

    name: str = "collection"

    async def list(self) -> list[OrderedEntity]:
        """Full reload of every entity of this kind."""
        raise NotImplementedError

    async def create(self, payload: Mapping[str, Any]) -> OrderedEntity:
        raise NotImplementedError

    async def update(self, entity_id: str, payload: Mapping[str, Any]) -> OrderedEntity:
        raise NotImplementedError

    async def delete(self, entity_id: str) -> None:
        raise NotImplementedError


class CollaboratorError(Exception):
    """Raised by MemoryCollection for missing ids and injected failures."""

    pass


class MemoryCollection(Collaborator):
    """
    In-memory collection for testing.

    `fail_on` injects failures: a set of (operation, entity_id) pairs, where
    entity_id may be "*" to fail every call of that operation.
    """

    def __init__(self, entities: list[OrderedEntity] | None = None, name: str = "memory") -> None:
        self.name = name
        self.rows: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str | None]] = []
        self.fail_on: set[tuple[str, str]] = set()
        for entity in entities or []:
            self.rows[entity.id] = entity.as_payload()

    def _check(self, op: str, entity_id: str | None) -> None:
        self.calls.append((op, entity_id))
        if (op, "*") in self.fail_on or (op, entity_id or "") in self.fail_on:
            raise CollaboratorError(f"{self.name}: injected {op} failure for {entity_id}")

    def _entity(self, entity_id: str) -> OrderedEntity:
        return OrderedEntity.from_dict({"id": entity_id, **copy.deepcopy(self.rows[entity_id])})

    async def list(self) -> list[OrderedEntity]:
        self._check("list", None)
        return [self._entity(entity_id) for entity_id in self.rows]

    async def create(self, payload: Mapping[str, Any]) -> OrderedEntity:
        self._check("create", None)
        entity_id = uuid.uuid4().hex[:12]
        row = dict(payload)
        row.setdefault(PARENT_KEY, None)
        row.setdefault(ORDER_KEY, 0)
        self.rows[entity_id] = row
        return self._entity(entity_id)

    async def update(self, entity_id: str, payload: Mapping[str, Any]) -> OrderedEntity:
        self._check("update", entity_id)
        if entity_id not in self.rows:
            raise CollaboratorError(f"{self.name}: {entity_id} not found")
        self.rows[entity_id] = dict(payload)
        return self._entity(entity_id)

    async def delete(self, entity_id: str) -> None:
        self._check("delete", entity_id)
        if entity_id not in self.rows:
            raise CollaboratorError(f"{self.name}: {entity_id} not found")
        del self.rows[entity_id]
