"""
Remote collections, the HTTP side of the engine's Collaborator contract.

One RemoteCollection per entity kind. It reads wire rows into OrderedEntity
(parent and order fields lifted out, everything else kept as payload) and
turns canonical payloads back into full-replace request bodies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from console.models.careers import (
    Business,
    BusinessRequest,
    CareerProject,
    CareerProjectRequest,
    CareersListing,
)
from console.models.certifications import (
    Award,
    Certification,
    CertificationsListing,
    CredentialRequest,
)
from console.models.common import WireModel
from console.models.projects import ProjectContent, ProjectContentRequest, ProjectDetail
from console.models.skills import Category, CategoryRequest, Skill, SkillRequest, SkillsListing
from console.services.api_client import ApiClient, ApiError
from engine.hierarchy.collaborator import Collaborator
from engine.hierarchy.types import ORDER_KEY, PARENT_KEY, OrderedEntity

logger = logging.getLogger(__name__)


class RemoteCollection(Collaborator):
    """
    One entity kind behind the admin API.

    Args:
        api: shared ApiClient
        name: label for logs and messages
        list_path: GET path for the full listing
        item_path: POST path; PUT/DELETE go to {item_path}/{id}
        dto: model for one row
        request: model for create/replace bodies
        listing: model wrapping the listing body; rows are read from its
            `list_key` attribute. None when the listing is a bare array.
        parent_field: dto attribute holding the parent/category reference
        order_field: dto attribute holding the order index
        extra: fields merged into every request body (e.g. project_id)
    """

    def __init__(
        self,
        api: ApiClient,
        *,
        name: str,
        list_path: str,
        item_path: str,
        dto: type[WireModel],
        request: type[WireModel],
        listing: type[WireModel] | None = None,
        list_key: str | None = None,
        parent_field: str | None = None,
        order_field: str = "order",
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        self.api = api
        self.name = name
        self.list_path = list_path
        self.item_path = item_path
        self.dto = dto
        self.request = request
        self.listing = listing
        self.list_key = list_key
        self.parent_field = parent_field
        self.order_field = order_field
        self.extra = dict(extra or {})

    # -- conversion --------------------------------------------------------

    def to_entity(self, row: WireModel | Mapping[str, Any]) -> OrderedEntity:
        dto = row if isinstance(row, WireModel) else self.dto.model_validate(row)
        structural = {"id", self.order_field}
        if self.parent_field:
            structural.add(self.parent_field)
        return OrderedEntity(
            id=str(dto.id),
            parent_key=getattr(dto, self.parent_field) if self.parent_field else None,
            order=getattr(dto, self.order_field) or 0,
            payload=dto.model_dump(exclude=structural, exclude_none=True),
        )

    def to_request(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Canonical payload → validated full-replace wire body."""
        data = {k: v for k, v in payload.items() if k not in (PARENT_KEY, ORDER_KEY)}
        if self.parent_field:
            data[self.parent_field] = payload.get(PARENT_KEY)
        data[self.order_field] = payload.get(ORDER_KEY) or 0
        data.update(self.extra)
        return self.request.model_validate(data).to_wire()

    def _rows(self, data: Any) -> list[Any]:
        if data is None:
            return []
        if self.listing is None:
            return list(data)
        listing = self.listing.model_validate(data)
        return list(getattr(listing, self.list_key or "") or [])

    # -- Collaborator ------------------------------------------------------

    async def list(self) -> list[OrderedEntity]:
        data = await self.api.get(self.list_path)
        entities = [self.to_entity(row) for row in self._rows(data)]
        logger.debug("collections: %s listed %d", self.name, len(entities))
        return entities

    async def create(self, payload: Mapping[str, Any]) -> OrderedEntity:
        data = await self.api.post(self.item_path, self.to_request(payload))
        if data is None:
            raise ApiError(f"{self.name}: create returned no entity", path=self.item_path)
        return self.to_entity(data)

    async def update(self, entity_id: str, payload: Mapping[str, Any]) -> OrderedEntity:
        data = await self.api.put(f"{self.item_path}/{entity_id}", self.to_request(payload))
        if data is None:
            # Some endpoints answer an update with an empty body.
            return OrderedEntity.from_dict({"id": entity_id, **payload})
        return self.to_entity(data)

    async def delete(self, entity_id: str) -> None:
        await self.api.delete(f"{self.item_path}/{entity_id}")


# ---------------------------------------------------------------------------
# Collections by kind
# ---------------------------------------------------------------------------


def skills(api: ApiClient) -> RemoteCollection:
    return RemoteCollection(
        api,
        name="skills",
        list_path="/api/skills",
        item_path="/api/skills",
        dto=Skill,
        request=SkillRequest,
        listing=SkillsListing,
        list_key="skills",
        parent_field="category_id",
    )


def categories(api: ApiClient) -> RemoteCollection:
    return RemoteCollection(
        api,
        name="categories",
        list_path="/api/skills/categories",
        item_path="/api/skills/categories",
        dto=Category,
        request=CategoryRequest,
    )


def project_contents(api: ApiClient, project_id: str) -> RemoteCollection:
    """Content blocks of one project; listed from the project detail."""
    return RemoteCollection(
        api,
        name="project contents",
        list_path=f"/api/projects/{project_id}",
        item_path="/api/projects/contents",
        dto=ProjectContent,
        request=ProjectContentRequest,
        listing=ProjectDetail,
        list_key="contents",
        parent_field="parent_id",
        extra={"project_id": project_id},
    )


def businesses(api: ApiClient) -> RemoteCollection:
    return RemoteCollection(
        api,
        name="businesses",
        list_path="/api/careers",
        item_path="/api/careers/business",
        dto=Business,
        request=BusinessRequest,
        listing=CareersListing,
        list_key="businesses",
        order_field="order_index",
    )


def career_projects(api: ApiClient) -> RemoteCollection:
    return RemoteCollection(
        api,
        name="career projects",
        list_path="/api/careers",
        item_path="/api/careers/projects",
        dto=CareerProject,
        request=CareerProjectRequest,
        listing=CareersListing,
        list_key="projects",
        order_field="order_index",
    )


def certifications(api: ApiClient) -> RemoteCollection:
    return RemoteCollection(
        api,
        name="certifications",
        list_path="/api/certifications",
        item_path="/api/certifications/certifications",
        dto=Certification,
        request=CredentialRequest,
        listing=CertificationsListing,
        list_key="certifications",
        order_field="order_index",
    )


def awards(api: ApiClient) -> RemoteCollection:
    return RemoteCollection(
        api,
        name="awards",
        list_path="/api/certifications",
        item_path="/api/certifications/awards",
        dto=Award,
        request=CredentialRequest,
        listing=CertificationsListing,
        list_key="awards",
        order_field="order_index",
    )
