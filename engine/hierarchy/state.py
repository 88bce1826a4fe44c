"""Client-held state for one ordered collection."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from engine.hierarchy.types import OrderedEntity


@dataclass
class CollectionState:
    """
    The flat collection a board renders from.

    `entities` is always an immutable tuple and is replaced wholesale, never
    mutated in place; `version` goes up on every replacement so derived
    structures can be invalidated by identity or version.

    `snapshot` is the last collection the server confirmed (a full load or an
    acknowledged write). Optimistic edits change `entities` only, so a failed
    write can fall back to `snapshot`.
    """

    name: str = "collection"
    entities: tuple[OrderedEntity, ...] = ()
    snapshot: tuple[OrderedEntity, ...] = ()
    version: int = 0
    error: str | None = None
    busy: bool = False
    loaded: bool = False

    def replace(self, entities: Iterable[OrderedEntity]) -> None:
        """Swap in a new local (possibly optimistic) collection."""
        self.entities = tuple(entities)
        self.version += 1

    def commit_load(self, entities: Iterable[OrderedEntity]) -> None:
        """Record an authoritative full load."""
        self.replace(entities)
        self.snapshot = self.entities
        self.loaded = True

    def confirm(self) -> None:
        """The server accepted the local collection; make it the fallback."""
        self.snapshot = self.entities

    def rollback(self) -> None:
        """Discard optimistic changes, back to the last successful load."""
        self.replace(self.snapshot)

    def get(self, entity_id: str) -> OrderedEntity | None:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def candidates(self, token: str) -> list[OrderedEntity]:
        """The entity with id `token`, or else every entity whose id starts with it."""
        exact = self.get(token)
        if exact is not None:
            return [exact]
        if not token:
            return []
        return [entity for entity in self.entities if entity.id.startswith(token)]

    def match(self, token: str) -> OrderedEntity | None:
        """Entity whose id is `token` or starts with it, if exactly one does."""
        hits = self.candidates(token)
        return hits[0] if len(hits) == 1 else None

    def require(self, token: str) -> OrderedEntity | None:
        """match(), setting a user-facing error when nothing or several match."""
        hits = self.candidates(token)
        if len(hits) == 1:
            return hits[0]
        if hits:
            self.error = f"Several {self.name} match '{token}': {', '.join(e.id for e in hits)}."
        else:
            self.error = f"Nothing in {self.name} matches '{token}'."
        return None

    def clear_error(self) -> None:
        self.error = None
