from pydantic import BaseModel, Field

from config import settings
from models.responses import UserContext
from models.schemas.structured_resume import StructuredResume


class ATSScoreRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_resume_chars, description="Plain text resume content")
    job_description: str = Field("", max_length=settings.max_job_description_chars, description="Job description text")
    page_count: int | None = Field(None, ge=1, description="Page count from resume metadata")
    strict_mode: bool = True


class SemanticScoreRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_resume_chars)
    job_description: str = Field(..., max_length=settings.max_job_description_chars)


class VisaCheckRequest(BaseModel):
    resume_text: str = Field("", max_length=settings.max_resume_chars)
    user_context: UserContext | None = None


class PatternsRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_resume_chars)
    page_count: int | None = Field(None, ge=1)
    jd_keywords: list[str] | None = None
    reference_text: str | None = Field(None, max_length=settings.max_resume_chars, description="Known-successful example to compare against")


class FormattingAnalysisRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_resume_chars)
    page_count: int | None = Field(None, ge=1)
    reference_texts: list[str] = Field([], max_length=50)


class FitOnePageRequest(BaseModel):
    resume: StructuredResume
    template_id: str = "classic"


class ContrastiveAnalysisRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_resume_chars)
    positive_texts: list[str] = Field([], max_length=50, description="Resumes that succeeded for similar jobs")
    negative_texts: list[str] = Field([], max_length=50, description="Resumes that were rejected for similar jobs")
