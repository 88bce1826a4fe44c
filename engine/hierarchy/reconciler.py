"""
Folio Hierarchy — Order reconciler

Every write gesture against an ordered collection goes through here.
A reorder runs in two phases:

  1. shadow: compute the move, apply the changed set to the local state
     right away (optimistic)
  2. sync:   one full-payload update per changed entity, dispatched
     concurrently and joined; each call settles into a CallOutcome

If any outcome failed, the shadow is thrown away and the collection is
reloaded from the collaborator. There is no per-item rollback or retry.
If the reload fails too, the state falls back to the last collection the
server confirmed.

Create / update / delete follow the same shape: optimistic local change
(where there is one), the remote call, then a full reload.

While a write is in flight the state is marked busy and further write
gestures on it are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from engine.hierarchy.collaborator import Collaborator
from engine.hierarchy.grouping import siblings
from engine.hierarchy.ordering import (
    apply_changes,
    next_order,
    remove_entity,
    replace_entity,
)
from engine.hierarchy.reorder import move_to_position, reorder_by_id
from engine.hierarchy.state import CollectionState
from engine.hierarchy.types import (
    ORDER_KEY,
    PARENT_KEY,
    UNCATEGORIZED,
    CallOutcome,
    OrderedEntity,
    ReconcileReport,
    ReorderResult,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class OrderReconciler:
    """
    Optimistic writer for one collection.

    Args:
        collaborator: remote collection for this entity kind
        group_keys: for grouped collections, returns the currently known
            group keys (e.g. category ids). Leave None for trees, where
            sibling groups are matched on the exact parent id.
        timeout: bound on each remote call, in seconds
        label: human name used in user-facing messages ("skills")
    """

    def __init__(
        self,
        collaborator: Collaborator,
        group_keys: Callable[[], Sequence[str]] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        label: str | None = None,
    ) -> None:
        self.collaborator = collaborator
        self.group_keys = group_keys
        self.timeout = timeout
        self.label = label or getattr(collaborator, "name", "collection")

    # -- reads -------------------------------------------------------------

    def siblings(self, state: CollectionState, group_key: str | None) -> tuple[OrderedEntity, ...]:
        """Current sorted sibling group for `group_key`."""
        keys = self.group_keys() if self.group_keys is not None else None
        return siblings(state.entities, group_key, keys)

    async def load(self, state: CollectionState) -> bool:
        """
        Full reload. On failure the prior entities stay in place and a
        retryable message is set.
        """
        try:
            entities = await self._call(self.collaborator.list())
        except Exception:
            logger.warning("reconciler: failed to load %s", self.label, exc_info=True)
            state.error = f"Failed to load {self.label}. Try again."
            return False
        state.commit_load(entities)
        state.error = None
        logger.info("reconciler: loaded %d %s", len(state.entities), self.label)
        return True

    # -- writes ------------------------------------------------------------

    async def reorder(
        self,
        state: CollectionState,
        group_key: str | None,
        active_id: str,
        over_id: str,
    ) -> ReconcileReport:
        """Drag `active_id` onto the slot of `over_id` within one sibling group."""
        return await self._reorder(
            state,
            lambda group: reorder_by_id(group, active_id, over_id),
            group_key,
        )

    async def move(
        self,
        state: CollectionState,
        group_key: str | None,
        entity_id: str,
        position: int,
    ) -> ReconcileReport:
        """Move `entity_id` to an absolute position within its sibling group."""
        return await self._reorder(
            state,
            lambda group: move_to_position(group, entity_id, position),
            group_key,
        )

    async def create(
        self,
        state: CollectionState,
        group_key: str | None,
        fields: Mapping[str, Any],
    ) -> OrderedEntity | None:
        """
        Append a new entity to the group `group_key`.
        Its order is the current sibling count.
        """
        if not self._begin(state, "create"):
            return None
        try:
            group = self.siblings(state, group_key)
            payload = dict(fields)
            payload[PARENT_KEY] = None if group_key == UNCATEGORIZED else group_key
            payload[ORDER_KEY] = next_order(group)

            try:
                created = await self._call(self.collaborator.create(payload))
            except Exception:
                logger.warning("reconciler: create failed for %s", self.label, exc_info=True)
                await self._recover(state, f"Failed to save {self.label}.")
                return None

            state.replace((*state.entities, created))
            state.confirm()
            await self._refresh(state)
            return created
        finally:
            state.busy = False

    async def update(self, state: CollectionState, entity: OrderedEntity) -> ReconcileReport:
        """Full-replace save of `entity`, shown locally before the server answers."""
        report = ReconcileReport()
        if not self._begin(state, "update"):
            report.skipped = True
            return report
        try:
            state.replace(replace_entity(state.entities, entity))
            outcome = await self._attempt(
                entity.id, lambda: self.collaborator.update(entity.id, entity.as_payload())
            )
            report.outcomes.append(outcome)
            if not outcome.ok:
                await self._recover(state, f"Failed to save {self.label}.")
                report.reloaded = True
                return report
            state.confirm()
            report.reloaded = await self._refresh(state)
            return report
        finally:
            state.busy = False

    async def delete(self, state: CollectionState, entity_id: str) -> ReconcileReport:
        """Remove `entity_id`, hidden locally before the server answers."""
        report = ReconcileReport()
        if not self._begin(state, "delete"):
            report.skipped = True
            return report
        try:
            state.replace(remove_entity(state.entities, entity_id))
            outcome = await self._attempt(entity_id, lambda: self.collaborator.delete(entity_id))
            report.outcomes.append(outcome)
            if not outcome.ok:
                await self._recover(state, f"Failed to delete from {self.label}.")
                report.reloaded = True
                return report
            state.confirm()
            report.reloaded = await self._refresh(state)
            return report
        finally:
            state.busy = False

    # -- internals ---------------------------------------------------------

    async def _reorder(
        self,
        state: CollectionState,
        compute: Callable[[tuple[OrderedEntity, ...]], ReorderResult],
        group_key: str | None,
    ) -> ReconcileReport:
        report = ReconcileReport()
        if not self._begin(state, "reorder"):
            report.skipped = True
            return report
        try:
            # Positions are resolved against the collection as it is now.
            group = self.siblings(state, group_key)
            result = compute(group)
            if result.is_noop:
                return report
            report.changed = result.changed

            # Phase 1: shadow.
            state.replace(apply_changes(state.entities, result.changed))

            # Phase 2: sync only the entities whose order moved.
            by_id = {entity.id: entity for entity in result.group}
            calls = [
                self._attempt(
                    change.id,
                    lambda entity=by_id[change.id]: self.collaborator.update(entity.id, entity.as_payload()),
                )
                for change in result.changed
            ]
            report.outcomes = list(await asyncio.gather(*calls))

            if report.ok:
                state.confirm()
                state.error = None
                logger.info(
                    "reconciler: reordered %s, %d update(s)", self.label, len(report.changed)
                )
                return report

            logger.warning(
                "reconciler: %d of %d order update(s) failed for %s, reloading",
                len(report.failures),
                len(report.outcomes),
                self.label,
            )
            await self._recover(state, "Failed to change the order.")
            report.reloaded = True
            return report
        finally:
            state.busy = False

    def _begin(self, state: CollectionState, gesture: str) -> bool:
        if state.busy:
            logger.info("reconciler: %s ignored, %s has a write in flight", gesture, self.label)
            return False
        state.busy = True
        return True

    async def _call(self, awaitable: Awaitable[Any]) -> Any:
        return await asyncio.wait_for(awaitable, timeout=self.timeout)

    async def _attempt(
        self,
        entity_id: str | None,
        call: Callable[[], Awaitable[Any]],
    ) -> CallOutcome:
        try:
            await self._call(call())
        except Exception as e:
            logger.warning("reconciler: write for %s/%s failed: %r", self.label, entity_id, e)
            return CallOutcome.failure(entity_id, e)
        return CallOutcome.success(entity_id)

    async def _recover(self, state: CollectionState, message: str) -> None:
        """Drop optimistic state: reload, or fall back to the confirmed collection."""
        try:
            entities = await self._call(self.collaborator.list())
        except Exception:
            logger.exception("reconciler: reload after failed write failed for %s", self.label)
            state.rollback()
        else:
            state.commit_load(entities)
        state.error = message

    async def _refresh(self, state: CollectionState) -> bool:
        """Reload after a successful write. A failure keeps the confirmed state."""
        try:
            entities = await self._call(self.collaborator.list())
        except Exception:
            logger.warning("reconciler: refresh failed for %s", self.label, exc_info=True)
            state.error = f"Saved, but failed to reload {self.label}."
            return False
        state.commit_load(entities)
        state.error = None
        return True
