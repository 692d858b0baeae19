"""Structured input contracts consumed by the engine."""

from models.schemas.structured_resume import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    Skills,
    StructuredResume,
)
from models.schemas.template_style import TemplateStyle

__all__ = [
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "Skills",
    "StructuredResume",
    "TemplateStyle",
]
