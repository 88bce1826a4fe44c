"""
Skill board: skills grouped under ordered categories.

Two collections share one board: categories (a flat ordered list) and
skills (ordered within their category). Skills whose category is null or
no longer exists are shown under the uncategorized group.
"""

from __future__ import annotations

import asyncio
import logging

from console import config
from console.services import collections
from console.services.api_client import ApiClient
from engine.hierarchy.grouping import Groups, SiblingGrouper
from engine.hierarchy.ordering import sort_by_order
from engine.hierarchy.reconciler import OrderReconciler
from engine.hierarchy.state import CollectionState
from engine.hierarchy.types import UNCATEGORIZED, OrderedEntity, ReconcileReport

logger = logging.getLogger(__name__)


class SkillBoard:
    def __init__(self, api: ApiClient, timeout: float | None = None) -> None:
        timeout = timeout or config.settings.WRITE_TIMEOUT
        self.skills = CollectionState(name="skills")
        self.categories = CollectionState(name="categories")
        self.skill_writer = OrderReconciler(
            collections.skills(api),
            group_keys=self.category_ids,
            timeout=timeout,
            label="skills",
        )
        self.category_writer = OrderReconciler(
            collections.categories(api),
            timeout=timeout,
            label="categories",
        )
        self._grouper = SiblingGrouper()

    # -- derived -----------------------------------------------------------

    def sorted_categories(self) -> tuple[OrderedEntity, ...]:
        return sort_by_order(self.categories.entities)

    def category_ids(self) -> list[str]:
        return [category.id for category in self.sorted_categories()]

    def groups(self) -> Groups:
        """Skills by category id, in category order, uncategorized last."""
        return self._grouper.group(self.skills.entities, self.category_ids())

    def group_key_of(self, skill: OrderedEntity) -> str:
        key = skill.parent_key
        if key is not None and key in self.category_ids():
            return key
        return UNCATEGORIZED

    @property
    def error(self) -> str | None:
        return self.categories.error or self.skills.error

    def clear_errors(self) -> None:
        self.skills.clear_error()
        self.categories.clear_error()

    # -- loading -----------------------------------------------------------

    async def load(self) -> bool:
        """Load categories and skills concurrently."""
        results = await asyncio.gather(
            self.category_writer.load(self.categories),
            self.skill_writer.load(self.skills),
        )
        return all(results)

    # -- skills ------------------------------------------------------------

    async def add_skill(self, category_id: str | None, name: str) -> OrderedEntity | None:
        """Append a skill to the end of its category (None = uncategorized)."""
        key = category_id if category_id in self.category_ids() else UNCATEGORIZED
        return await self.skill_writer.create(self.skills, key, {"name": name})

    async def rename_skill(self, skill_id: str, name: str) -> ReconcileReport | None:
        skill = self.skills.require(skill_id)
        if skill is None:
            return None
        updated = skill.with_fields(name=name)
        return await self.skill_writer.update(self.skills, updated)

    async def set_skill_category(self, skill_id: str, category_id: str | None) -> ReconcileReport | None:
        """Move a skill to the end of another category."""
        skill = self.skills.require(skill_id)
        if skill is None:
            return None
        key = category_id if category_id in self.category_ids() else UNCATEGORIZED
        target = [s for s in self.groups()[key] if s.id != skill.id]
        moved = skill.with_parent(None if key == UNCATEGORIZED else key).with_order(len(target))
        return await self.skill_writer.update(self.skills, moved)

    async def move_skill(self, skill_id: str, position: int) -> ReconcileReport | None:
        skill = self.skills.require(skill_id)
        if skill is None:
            return None
        return await self.skill_writer.move(self.skills, self.group_key_of(skill), skill.id, position)

    async def reorder_skill(self, active_id: str, over_id: str) -> ReconcileReport | None:
        """Drag one skill onto another within the same category."""
        active = self.skills.require(active_id)
        if active is None:
            return None
        return await self.skill_writer.reorder(self.skills, self.group_key_of(active), active.id, over_id)

    async def delete_skill(self, skill_id: str) -> ReconcileReport | None:
        skill = self.skills.require(skill_id)
        if skill is None:
            return None
        return await self.skill_writer.delete(self.skills, skill.id)

    # -- categories --------------------------------------------------------

    async def add_category(self, name: str) -> OrderedEntity | None:
        return await self.category_writer.create(self.categories, None, {"name": name})

    async def rename_category(self, category_id: str, name: str) -> ReconcileReport | None:
        category = self.categories.require(category_id)
        if category is None:
            return None
        updated = category.with_fields(name=name)
        return await self.category_writer.update(self.categories, updated)

    async def move_category(self, category_id: str, position: int) -> ReconcileReport | None:
        category = self.categories.require(category_id)
        if category is None:
            return None
        return await self.category_writer.move(self.categories, None, category.id, position)

    async def delete_category(self, category_id: str) -> ReconcileReport | None:
        """
        Delete a category. Its skills are reloaded afterwards; whatever the
        server did with their category reference, they group as uncategorized.
        """
        category = self.categories.require(category_id)
        if category is None:
            return None
        report = await self.category_writer.delete(self.categories, category.id)
        if report.ok and not report.skipped:
            logger.info("skill_board: category %s deleted, reloading skills", category.id)
            await self.skill_writer.load(self.skills)
        return report

