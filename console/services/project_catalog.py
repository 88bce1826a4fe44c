"""
Project catalog: the paginated list of projects.

Projects are not reordered from the console; a new project is appended
after every existing one (order = total element count).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from console import config
from console.models.projects import ProjectDetail, ProjectList, ProjectListItem, ProjectRequest
from console.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class ProjectCatalog:
    def __init__(
        self,
        api: ApiClient,
        page_size: int | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api = api
        self.page_size = page_size or config.settings.PAGE_SIZE
        self.timeout = timeout or config.settings.WRITE_TIMEOUT
        self.page: ProjectList | None = None
        self.error: str | None = None
        self.busy = False

    @property
    def items(self) -> list[ProjectListItem]:
        return self.page.items if self.page else []

    @property
    def page_number(self) -> int:
        """Zero-based number of the loaded page."""
        return self.page.number if self.page else 0

    async def load(self, page: int = 0) -> bool:
        """Load one page. A failure keeps the previously loaded page."""
        try:
            data = await self._call(
                self.api.get("/api/projects", params={"page": page, "size": self.page_size})
            )
            self.page = ProjectList.model_validate(data or {})
        except (ApiError, ValidationError, asyncio.TimeoutError):
            logger.warning("project_catalog: failed to load page %d", page, exc_info=True)
            self.error = "Failed to load projects. Try again."
            return False
        self.error = None
        logger.info(
            "project_catalog: page %d/%d, %d project(s)",
            self.page.number + 1,
            max(self.page.total_pages, 1),
            len(self.page.items),
        )
        return True

    async def detail(self, project_id: str) -> ProjectDetail | None:
        try:
            data = await self._call(self.api.get(f"/api/projects/{project_id}"))
            return ProjectDetail.model_validate(data)
        except (ApiError, ValidationError, asyncio.TimeoutError):
            logger.warning("project_catalog: failed to load project %s", project_id, exc_info=True)
            self.error = "Failed to load the project. Try again."
            return None

    async def create(self, title: str, **fields: Any) -> bool:
        """Create a project at the end of the list, then reload the current page."""
        if self.busy:
            logger.info("project_catalog: create ignored, a write is in flight")
            return False
        self.busy = True
        try:
            order = self.page.total_elements if self.page else 0
            try:
                body = ProjectRequest(title=title, order=order, **fields).to_wire()
                await self._call(self.api.post("/api/projects", body))
            except (ApiError, ValidationError, asyncio.TimeoutError):
                logger.warning("project_catalog: create failed", exc_info=True)
                self.error = "Failed to save the project."
                return False
            return await self.load(self.page_number)
        finally:
            self.busy = False

    async def update(self, project_id: str, **fields: Any) -> bool:
        """Full replace of a project: current detail with `fields` applied."""
        if self.busy:
            logger.info("project_catalog: update ignored, a write is in flight")
            return False
        self.busy = True
        try:
            current = await self.detail(project_id)
            if current is None:
                return False
            try:
                body = ProjectRequest.model_validate(
                    {**current.to_request().model_dump(), **fields}
                ).to_wire()
                await self._call(self.api.put(f"/api/projects/{project_id}", body))
            except (ApiError, ValidationError, asyncio.TimeoutError):
                logger.warning("project_catalog: update of %s failed", project_id, exc_info=True)
                self.error = "Failed to save the project."
                return False
            return await self.load(self.page_number)
        finally:
            self.busy = False

    def resolve(self, token: str) -> ProjectListItem | None:
        """A project on the current page by 1-based row number or id prefix."""
        if token.isdigit() and 1 <= int(token) <= len(self.items):
            return self.items[int(token) - 1]
        hits = [item for item in self.items if item.id == token]
        if not hits:
            hits = [item for item in self.items if item.id.startswith(token)]
        return hits[0] if len(hits) == 1 else None

    async def _call(self, awaitable: Any) -> Any:
        return await asyncio.wait_for(awaitable, timeout=self.timeout)
