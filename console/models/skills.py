"""Skill and category models."""

from __future__ import annotations

from pydantic import Field

from console.models.common import WireModel


class Category(WireModel):
    id: str
    name: str
    order: int | None = None


class CategoryRequest(WireModel):
    """What the client sends to create or replace a category."""

    name: str = Field(min_length=1, max_length=100)
    order: int = Field(default=0, ge=0)


class Skill(WireModel):
    id: str
    name: str
    category_id: str | None = None
    order: int | None = None


class SkillRequest(WireModel):
    """What the client sends to create or replace a skill."""

    name: str = Field(min_length=1, max_length=100)
    category_id: str | None = None
    order: int = Field(default=0, ge=0)


class SkillsListing(WireModel):
    """GET /api/skills body."""

    skills: list[Skill] = Field(default_factory=list)
    categories: list[Category] | None = None
