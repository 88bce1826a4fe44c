"""Career models: businesses and career projects."""

from __future__ import annotations

from pydantic import Field

from console.models.common import WireModel


class CareerBase(WireModel):
    start_date: str  # "YYYY-MM-DD"
    end_date: str | None = None
    company: str
    department: str | None = None
    position: str | None = None
    skills: list[str] | None = None
    order_index: int | None = None


class Business(CareerBase):
    id: str
    details: list[str] | None = None


class BusinessRequest(CareerBase):
    order_index: int = Field(default=0, ge=0)
    details: list[str] | None = None


class CareerProject(CareerBase):
    id: str


class CareerProjectRequest(CareerBase):
    order_index: int = Field(default=0, ge=0)


class CareersListing(WireModel):
    """GET /api/careers body."""

    businesses: list[Business] = Field(default_factory=list)
    projects: list[CareerProject] = Field(default_factory=list)
