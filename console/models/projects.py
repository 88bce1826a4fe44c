"""Project and project content models."""

from __future__ import annotations

from pydantic import Field

from console.models.common import WireModel


class ProjectContent(WireModel):
    """One content block. Blocks nest through parent_id."""

    id: str
    parent_id: str | None = None
    order: int | None = None
    content: str = ""
    children: list[str] | None = None


class ProjectContentRequest(WireModel):
    project_id: str
    parent_id: str | None = None
    order: int = Field(default=0, ge=0)
    content: str = Field(min_length=1)
    children: list[str] | None = None


class ProjectRequest(WireModel):
    """Create/replace payload for a project."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    skills: list[str] | None = None
    participants: int | None = Field(default=None, ge=1)
    period: str | None = None
    order: int = Field(default=0, ge=0)


class ProjectDetail(WireModel):
    id: str
    title: str
    description: str | None = None
    skills: list[str] | None = None
    participants: int | None = None
    period: str | None = None
    order: int | None = None
    contents: list[ProjectContent] | None = None

    def to_request(self) -> ProjectRequest:
        return ProjectRequest(
            title=self.title,
            description=self.description,
            skills=self.skills,
            participants=self.participants,
            period=self.period,
            order=self.order or 0,
        )


class ProjectListItem(WireModel):
    id: str
    title: str
    description: str | None = None
    skills: list[str] | None = None
    period: str | None = None
    order: int | None = None


class ProjectList(WireModel):
    """Paginated GET /api/projects body."""

    items: list[ProjectListItem] = Field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    size: int = 0
    number: int = 0
    first: bool = True
    last: bool = True
