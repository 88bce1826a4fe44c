"""
Pydantic models for the Folio console.

All wire shapes defined here. No imports from services.
"""

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
from console.models.common import ApiResponse, WireModel
from console.models.projects import (
    ProjectContent,
    ProjectContentRequest,
    ProjectDetail,
    ProjectList,
    ProjectListItem,
    ProjectRequest,
)
from console.models.skills import Category, CategoryRequest, Skill, SkillRequest, SkillsListing

__all__ = [
    # Shared
    "WireModel",
    "ApiResponse",
    # Skills
    "Category",
    "CategoryRequest",
    "Skill",
    "SkillRequest",
    "SkillsListing",
    # Projects
    "ProjectContent",
    "ProjectContentRequest",
    "ProjectDetail",
    "ProjectList",
    "ProjectListItem",
    "ProjectRequest",
    # Careers
    "Business",
    "BusinessRequest",
    "CareerProject",
    "CareerProjectRequest",
    "CareersListing",
    # Certifications
    "Certification",
    "Award",
    "CredentialRequest",
    "CertificationsListing",
]
