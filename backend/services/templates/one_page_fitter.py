"""Fit a structured resume onto a single Letter page.

Content height is estimated in points and trimmed step by step, least
destructive first, until the estimate fits. Each step that removes
content records what it removed so the caller can show it.
"""

import logging
import math
from typing import Callable

from models.responses import FitResult
from models.schemas.structured_resume import StructuredResume
from models.schemas.template_style import TemplateStyle
from services.templates.styles import get_template_style

logger = logging.getLogger(__name__)

# Letter page in points, default template margins
PAGE_HEIGHT = 792
MARGIN_TOP = 36
MARGIN_BOTTOM = 48
USABLE_HEIGHT = PAGE_HEIGHT - MARGIN_TOP - MARGIN_BOTTOM

HEADER_HEIGHT = 60  # name + contact line
BASE_LINE_HEIGHT = 14
BASE_BODY_FONT = 10.5
SUMMARY_CHARS_PER_LINE = 80
SKILLS_PER_LINE = 6

SUMMARY_MAX_CHARS = 200
REMOVED_BULLET_PREVIEW = 50


def estimate_content_height(resume: StructuredResume, style: TemplateStyle) -> float:
    """Estimated rendered height in points for the given style."""
    line = BASE_LINE_HEIGHT * style.body_font_size / BASE_BODY_FONT
    gap = style.section_gap
    height = HEADER_HEIGHT

    if resume.summary:
        height += math.ceil(len(resume.summary) / SUMMARY_CHARS_PER_LINE) * line + gap

    height += gap
    for exp in resume.experience:
        height += line * 2  # title, company, dates
        height += len(exp.bullets) * line * 1.5
        height += gap / 2

    height += gap
    for edu in resume.education:
        height += line * 2
        height += len(edu.highlights) * line
        height += gap / 2

    height += gap
    skills = resume.skills
    total_skills = len(skills.technical) + len(skills.soft) + len(skills.tools) + len(skills.languages)
    height += math.ceil(total_skills / SKILLS_PER_LINE) * line

    if resume.projects:
        height += gap
        for proj in resume.projects:
            height += line * 1.5
            height += len(proj.bullets) * line

    if resume.certifications:
        height += gap
        height += len(resume.certifications) * line

    return height


def _fits(resume: StructuredResume, style: TemplateStyle) -> bool:
    return estimate_content_height(resume, style) <= USABLE_HEIGHT


# ---------------------------------------------------------------------------
# Trimming steps. Each returns a new resume and a list of removal notes;
# inputs are never mutated.
# ---------------------------------------------------------------------------

def trim_experience_bullets(resume: StructuredResume, max_bullets: int) -> tuple[StructuredResume, list[str]]:
    removed: list[str] = []
    experience = []
    for exp in resume.experience:
        if len(exp.bullets) <= max_bullets:
            experience.append(exp)
            continue
        removed.extend(f"[{exp.company}] {b[:REMOVED_BULLET_PREVIEW]}..." for b in exp.bullets[max_bullets:])
        experience.append(exp.model_copy(update={"bullets": exp.bullets[:max_bullets]}))
    return resume.model_copy(update={"experience": experience}), removed


def trim_older_experience(resume: StructuredResume, keep: int) -> tuple[StructuredResume, list[str]]:
    if len(resume.experience) <= keep:
        return resume, []
    removed = [f"Removed: {e.title} @ {e.company}" for e in resume.experience[keep:]]
    return resume.model_copy(update={"experience": resume.experience[:keep]}), removed


def shorten_summary(resume: StructuredResume, max_chars: int) -> tuple[StructuredResume, list[str]]:
    if not resume.summary or len(resume.summary) <= max_chars:
        return resume, []

    shortened = resume.summary[:max_chars]
    last_period = shortened.rfind(".")
    if last_period > max_chars * 0.6:
        shortened = shortened[: last_period + 1]
    else:
        shortened = shortened.strip() + "..."
    return resume.model_copy(update={"summary": shortened}), ["Summary shortened"]


def trim_skills(resume: StructuredResume, max_per_category: int) -> tuple[StructuredResume, list[str]]:
    removed: list[str] = []
    update: dict[str, list[str]] = {}
    for category in ("technical", "soft", "tools", "languages"):
        items = getattr(resume.skills, category)
        if len(items) > max_per_category:
            removed.append(f"Removed {len(items) - max_per_category} {category} skills")
        update[category] = items[:max_per_category]
    skills = resume.skills.model_copy(update=update)
    return resume.model_copy(update={"skills": skills}), removed


def remove_projects(resume: StructuredResume) -> tuple[StructuredResume, list[str]]:
    if not resume.projects:
        return resume, []
    return resume.model_copy(update={"projects": None}), ["Removed Projects section"]


def tighten_style(style: TemplateStyle) -> TemplateStyle:
    return style.model_copy(update={
        "body_font_size": max(9.5, style.body_font_size - 0.5),
        "heading_font_size": max(10, style.heading_font_size - 1),
        "section_gap": max(8, style.section_gap - 4),
    })


Step = Callable[[StructuredResume, TemplateStyle], tuple[StructuredResume, TemplateStyle, list[str]]]


def _content(fn: Callable[[StructuredResume], tuple[StructuredResume, list[str]]]) -> Step:
    def step(resume: StructuredResume, style: TemplateStyle):
        trimmed, removed = fn(resume)
        return trimmed, style, removed
    return step


def _last_resort(resume: StructuredResume, style: TemplateStyle):
    resume, removed_bullets = trim_experience_bullets(resume, 2)
    resume, removed_roles = trim_older_experience(resume, 2)
    return resume, style, removed_bullets + removed_roles


# (step, confidence if the result fits), least destructive first
FIT_STEPS: tuple[tuple[Step, int], ...] = (
    (_content(lambda r: trim_experience_bullets(r, 4)), 90),
    (_content(lambda r: trim_experience_bullets(r, 3)), 85),
    (_content(lambda r: shorten_summary(r, SUMMARY_MAX_CHARS)), 80),
    (lambda r, s: (r, tighten_style(s), []), 75),
    (_content(remove_projects), 70),
    (_content(lambda r: trim_skills(r, 8)), 65),
    (_content(lambda r: trim_older_experience(r, 3)), 55),
)
LAST_RESORT_CONFIDENCE = 40
ALREADY_FITS_CONFIDENCE = 95


def fit_to_one_page(resume: StructuredResume, template_id: str) -> FitResult:
    """Trim a resume until its estimated height fits on one page."""
    style = get_template_style(template_id)
    if _fits(resume, style):
        return FitResult(
            fitted_resume=resume,
            adjusted_style=style,
            removed_content=[],
            fit_confidence=ALREADY_FITS_CONFIDENCE,
        )

    removed: list[str] = []
    current = resume
    for step, confidence in FIT_STEPS:
        current, style, step_removed = step(current, style)
        removed.extend(step_removed)
        for note in step_removed:
            logger.debug("One-page fit: %s", note)
        if _fits(current, style):
            logger.info("Resume fits one page (confidence %d, %d items removed)", confidence, len(removed))
            return FitResult(
                fitted_resume=current,
                adjusted_style=style,
                removed_content=removed,
                fit_confidence=confidence,
            )

    current, style, step_removed = _last_resort(current, style)
    removed.extend(step_removed)
    logger.warning("Resume needed aggressive trimming to fit one page (%d items removed)", len(removed))
    return FitResult(
        fitted_resume=current,
        adjusted_style=style,
        removed_content=removed,
        fit_confidence=LAST_RESORT_CONFIDENCE,
    )


def will_fit_one_page(resume: StructuredResume, template_id: str) -> bool:
    return _fits(resume, get_template_style(template_id))


def estimate_page_count(resume: StructuredResume, template_id: str) -> int:
    height = estimate_content_height(resume, get_template_style(template_id))
    return math.ceil(height / USABLE_HEIGHT)
