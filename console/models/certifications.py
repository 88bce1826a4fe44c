"""Certification and award models."""

from __future__ import annotations

from pydantic import Field

from console.models.common import WireModel


class Credential(WireModel):
    name: str
    date: str  # "YY.MM."
    organization: str | None = None
    tier: str | None = None
    order_index: int | None = None


class Certification(Credential):
    id: str


class Award(Credential):
    id: str


class CredentialRequest(Credential):
    """Create/replace payload shared by certifications and awards."""

    name: str = Field(min_length=1, max_length=200)
    order_index: int = Field(default=0, ge=0)


class CertificationsListing(WireModel):
    """GET /api/certifications body."""

    certifications: list[Certification] = Field(default_factory=list)
    awards: list[Award] = Field(default_factory=list)
