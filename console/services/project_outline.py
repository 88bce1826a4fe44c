"""
Project outline: the nested content blocks of one project.

Blocks reference their parent block; the outline is the forest assembled
from them. Every block is ordered among the blocks sharing its parent.
"""

from __future__ import annotations

import logging

from console import config
from console.services import collections
from console.services.api_client import ApiClient
from engine.hierarchy.reconciler import OrderReconciler
from engine.hierarchy.state import CollectionState
from engine.hierarchy.tree import Forest, TreeAssembler
from engine.hierarchy.types import OrderedEntity, ReconcileReport

logger = logging.getLogger(__name__)


class ProjectOutline:
    def __init__(
        self,
        api: ApiClient,
        project_id: str,
        title: str = "",
        timeout: float | None = None,
    ) -> None:
        self.project_id = project_id
        self.title = title
        self.contents = CollectionState(name="project contents")
        self.writer = OrderReconciler(
            collections.project_contents(api, project_id),
            timeout=timeout or config.settings.WRITE_TIMEOUT,
            label="project contents",
        )
        self._assembler = TreeAssembler()

    def forest(self) -> Forest:
        """Current tree; recomputed only when the contents change."""
        return self._assembler.assemble(self.contents.entities)

    @property
    def error(self) -> str | None:
        return self.contents.error

    async def load(self) -> bool:
        return await self.writer.load(self.contents)

    async def add(self, parent_id: str | None, text: str) -> OrderedEntity | None:
        """Append a block as the last child of `parent_id` (None = top level)."""
        if parent_id is not None:
            parent = self.contents.require(parent_id)
            if parent is None:
                return None
            parent_id = parent.id
        return await self.writer.create(self.contents, parent_id, {"content": text})

    async def edit(self, content_id: str, text: str) -> ReconcileReport | None:
        block = self.contents.require(content_id)
        if block is None:
            return None
        return await self.writer.update(self.contents, block.with_fields(content=text))

    async def move(self, content_id: str, position: int) -> ReconcileReport | None:
        """Move a block to `position` among its siblings."""
        block = self.contents.require(content_id)
        if block is None:
            return None
        return await self.writer.move(self.contents, block.parent_key, block.id, position)

    async def reorder(self, active_id: str, over_id: str) -> ReconcileReport | None:
        block = self.contents.require(active_id)
        if block is None:
            return None
        return await self.writer.reorder(self.contents, block.parent_key, block.id, over_id)

    async def delete(self, content_id: str) -> ReconcileReport | None:
        """
        Delete a block. Its descendants are not touched here; after the reload
        they either went with it or no longer reach a root and are not shown.
        """
        block = self.contents.require(content_id)
        if block is None:
            return None
        children = self.forest().children_of(block.id)
        if children:
            logger.info(
                "project_outline: deleting %s with %d child block(s)", block.id, len(children)
            )
        return await self.writer.delete(self.contents, block.id)
