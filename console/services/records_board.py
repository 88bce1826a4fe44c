"""
Records boards: flat ordered lists.

Careers (businesses, career projects) and credentials (certifications,
awards) have no grouping: every record is a sibling of every other record
of its kind, ordered by orderIndex.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from console import config
from console.services import collections
from console.services.api_client import ApiClient
from engine.hierarchy.collaborator import Collaborator
from engine.hierarchy.ordering import sort_by_order
from engine.hierarchy.reconciler import OrderReconciler
from engine.hierarchy.state import CollectionState
from engine.hierarchy.types import OrderedEntity, ReconcileReport


class RecordList:
    """One flat ordered collection and its writer."""

    def __init__(self, collaborator: Collaborator, label: str, timeout: float | None = None) -> None:
        self.label = label
        self.state = CollectionState(name=label)
        self.writer = OrderReconciler(
            collaborator,
            timeout=timeout or config.settings.WRITE_TIMEOUT,
            label=label,
        )

    def items(self) -> tuple[OrderedEntity, ...]:
        return sort_by_order(self.state.entities)

    async def load(self) -> bool:
        return await self.writer.load(self.state)

    async def create(self, fields: Mapping[str, Any]) -> OrderedEntity | None:
        """Append a record after every existing one."""
        return await self.writer.create(self.state, None, fields)

    async def update(self, record_id: str, fields: Mapping[str, Any]) -> ReconcileReport | None:
        """Full-replace save of a record with `fields` changed; None clears a field."""
        record = self.state.require(record_id)
        if record is None:
            return None
        return await self.writer.update(self.state, record.with_fields(**fields))

    async def move(self, record_id: str, position: int) -> ReconcileReport | None:
        record = self.state.require(record_id)
        if record is None:
            return None
        return await self.writer.move(self.state, None, record.id, position)

    async def reorder(self, active_id: str, over_id: str) -> ReconcileReport | None:
        record = self.state.require(active_id)
        if record is None:
            return None
        return await self.writer.reorder(self.state, None, record.id, over_id)

    async def delete(self, record_id: str) -> ReconcileReport | None:
        record = self.state.require(record_id)
        if record is None:
            return None
        return await self.writer.delete(self.state, record.id)


class RecordsBoard:
    """Two record lists that come from the same listing endpoint."""

    def __init__(self, first: RecordList, second: RecordList) -> None:
        self.lists = (first, second)

    @property
    def error(self) -> str | None:
        for records in self.lists:
            if records.state.error:
                return records.state.error
        return None

    def clear_errors(self) -> None:
        for records in self.lists:
            records.state.clear_error()

    async def load(self) -> bool:
        results = await asyncio.gather(*(records.load() for records in self.lists))
        return all(results)


class CareersBoard(RecordsBoard):
    def __init__(self, api: ApiClient, timeout: float | None = None) -> None:
        self.businesses = RecordList(collections.businesses(api), "businesses", timeout)
        self.projects = RecordList(collections.career_projects(api), "career projects", timeout)
        super().__init__(self.businesses, self.projects)


class CertificationsBoard(RecordsBoard):
    def __init__(self, api: ApiClient, timeout: float | None = None) -> None:
        self.certifications = RecordList(collections.certifications(api), "certifications", timeout)
        self.awards = RecordList(collections.awards(api), "awards", timeout)
        super().__init__(self.certifications, self.awards)
