"""Structured resume consumed by the one-page fitter."""

from pydantic import BaseModel


class ContactInfo(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""


class ExperienceEntry(BaseModel):
    """A single role. Entries are ordered most recent first."""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: list[str] = []


class EducationEntry(BaseModel):
    school: str = ""
    degree: str = ""
    field: str = ""
    gpa: str = ""
    end_date: str = ""
    highlights: list[str] = []


class ProjectEntry(BaseModel):
    name: str = ""
    description: str = ""
    url: str = ""
    technologies: list[str] = []
    bullets: list[str] = []


class Skills(BaseModel):
    technical: list[str] = []
    soft: list[str] = []
    tools: list[str] = []
    languages: list[str] = []


class StructuredResume(BaseModel):
    contact: ContactInfo = ContactInfo()
    summary: str = ""
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    skills: Skills = Skills()
    projects: list[ProjectEntry] | None = None
    certifications: list[str] | None = None
