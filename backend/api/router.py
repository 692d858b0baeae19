import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedding_provider
from config import settings
from models.requests import (
    ATSScoreRequest,
    ContrastiveAnalysisRequest,
    FitOnePageRequest,
    FormattingAnalysisRequest,
    PatternsRequest,
    SemanticScoreRequest,
    VisaCheckRequest,
)
from models.responses import (
    ATSAnalysisResult,
    ContrastiveReport,
    FitResult,
    FormattingAnalysisResult,
    PatternsResponse,
    SemanticAnalysisResult,
    VisaSignalResult,
)
from services import ats_engine, content_patterns, contrastive_analysis, hr_formatting, similarity, visa_detection
from services.embedding_client import BaseEmbeddingProvider
from services.formatting_patterns import extract_formatting_patterns
from services.templates import one_page_fitter

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "embedding_provider": settings.embedding_provider,
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/ats-score", response_model=ATSAnalysisResult)
@limiter.limit("10/minute")
async def ats_score(request: Request, body: ATSScoreRequest):
    return ats_engine.run_ats_analysis(
        body.resume_text,
        body.job_description,
        page_count=body.page_count,
        strict_mode=body.strict_mode,
    )


@router.post("/semantic-score", response_model=SemanticAnalysisResult)
@limiter.limit("10/minute")
async def semantic_score(
    request: Request,
    body: SemanticScoreRequest,
    provider: BaseEmbeddingProvider = Depends(get_embedding_provider),
):
    try:
        return await similarity.run_semantic_analysis(body.resume_text, body.job_description, provider)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Embedding provider failed: %s", e)
        raise HTTPException(status_code=502, detail="Embedding provider unavailable")


@router.post("/visa-check", response_model=VisaSignalResult)
@limiter.limit("10/minute")
async def visa_check(request: Request, body: VisaCheckRequest):
    return visa_detection.detect_visa_status(body.resume_text, body.user_context)


@router.post("/patterns", response_model=PatternsResponse)
@limiter.limit("10/minute")
async def patterns(request: Request, body: PatternsRequest):
    user = content_patterns.extract_content_patterns(body.resume_text, body.jd_keywords)
    comparisons = []
    if body.reference_text:
        reference = content_patterns.extract_content_patterns(body.reference_text)
        comparisons = content_patterns.compare_patterns(user, reference)
    return PatternsResponse(
        formatting=extract_formatting_patterns(body.resume_text, body.page_count),
        content=user,
        comparisons=comparisons,
    )


@router.post("/contrastive-analysis", response_model=ContrastiveReport)
@limiter.limit("10/minute")
async def contrastive(request: Request, body: ContrastiveAnalysisRequest):
    positive = [content_patterns.extract_content_patterns(text) for text in body.positive_texts if text.strip()]
    negative = [content_patterns.extract_content_patterns(text) for text in body.negative_texts if text.strip()]
    analysis = contrastive_analysis.analyze_contrastive_patterns(positive, negative)
    user = content_patterns.extract_content_patterns(body.resume_text)
    return ContrastiveReport(
        analysis=analysis,
        suggestions=contrastive_analysis.contrastive_insights_to_suggestions(user, analysis),
    )


@router.post("/formatting-analysis", response_model=FormattingAnalysisResult)
@limiter.limit("10/minute")
async def formatting_analysis(request: Request, body: FormattingAnalysisRequest):
    references = [extract_formatting_patterns(text) for text in body.reference_texts if text.strip()]
    return hr_formatting.analyze_formatting(body.resume_text, body.page_count, references)


@router.post("/fit-one-page", response_model=FitResult)
@limiter.limit("10/minute")
async def fit_one_page(request: Request, body: FitOnePageRequest):
    return one_page_fitter.fit_to_one_page(body.resume, body.template_id)
