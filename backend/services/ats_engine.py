"""ATS simulation: keyword, formatting and section checks rolled into one score.

Mirrors how real applicant tracking systems filter resumes: exact
keyword matching, layout sanity checks and standard section detection,
weighted by the kind of job being applied for.
"""

import logging

from config import settings
from models.responses import (
    ATSAnalysisResult,
    ATSScore,
    FormattingResult,
    Issue,
    JobType,
    MatchResult,
    SectionResult,
    WeightProfile,
)
from services.formatting_checker import check_formatting
from services.job_type import WEIGHT_PROFILES, detect_job_type
from services.keyword_extractor import extract_keywords, match_keywords
from services.numeric import round_half_up
from services.section_parser import validate_sections

logger = logging.getLogger(__name__)

# Missing these sections is critical, the rest are warnings
CRITICAL_SECTIONS = frozenset({"Contact", "Experience"})


def _section_issue(name: str) -> Issue:
    return Issue(
        type="section",
        severity="critical" if name in CRITICAL_SECTIONS else "warning",
        message=(
            f'"{name}" section not detected. ATS systems expect standard resume '
            "sections to properly categorize your information."
        ),
        suggestion=f'Add a clearly labeled "{name}" section with a standard heading.',
    )


def compute_ats_score(
    keyword_result: MatchResult,
    formatting_result: FormattingResult,
    section_result: SectionResult,
    weights: WeightProfile | None = None,
    job_type: JobType = "general",
) -> ATSScore:
    """Combine the three ATS sub-scores into a weighted overall score.

    Explicit ``weights`` win over the profile for ``job_type``. Missing
    keywords are reported in ``missing_keywords`` only, never as issues.
    """
    if weights is None:
        weights = WEIGHT_PROFILES[job_type]

    overall = round_half_up(
        keyword_result.match_pct * weights.keywords
        + formatting_result.score * weights.formatting
        + section_result.score * weights.sections
    )

    issues = list(formatting_result.issues)
    issues.extend(_section_issue(s.name) for s in section_result.sections if not s.found)

    return ATSScore(
        overall=overall,
        keyword_match_pct=keyword_result.match_pct,
        formatting_score=formatting_result.score,
        section_score=section_result.score,
        matched_keywords=keyword_result.matched,
        missing_keywords=keyword_result.missing,
        issues=issues,
        passed=overall >= settings.ats_pass_threshold,
    )


def run_ats_analysis(
    resume_text: str,
    job_description: str,
    page_count: int | None = None,
    strict_mode: bool = True,
    job_type: JobType | None = None,
) -> ATSAnalysisResult:
    """Run the full ATS pipeline for one resume against one job description."""
    if not job_description.strip():
        logger.warning("Empty job description, no keywords to match")

    resolved_type = job_type or detect_job_type(job_description)
    weights = WEIGHT_PROFILES[resolved_type]

    keywords = extract_keywords(job_description)
    keyword_result = match_keywords(resume_text, keywords, strict_mode=strict_mode)
    formatting_result = check_formatting(resume_text, page_count=page_count)
    section_result = validate_sections(resume_text)

    score = compute_ats_score(keyword_result, formatting_result, section_result, weights=weights)

    logger.info(
        "ATS analysis: overall=%d passed=%s job_type=%s keywords=%d/%d",
        score.overall, score.passed, resolved_type,
        len(keyword_result.matched), len(keywords),
    )
    return ATSAnalysisResult(**score.model_dump(), job_type=resolved_type, weights=weights)
