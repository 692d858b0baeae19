"""Formatting checks for layout problems that break real ATS parsers."""

import logging
import re

from models.responses import FormattingResult, Issue

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(\+?1?[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

TABLE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\t{2,}"),  # consecutive tabs
    re.compile(r"\|.*\|.*\|"),  # pipe-delimited row
)
MULTI_COLUMN_RE = re.compile(r"\s{5,}\S+.*\s{5,}\S+", re.MULTILINE)

DATE_FORMAT_FAMILIES: tuple[re.Pattern, ...] = (
    re.compile(r"\b\d{1,2}/\d{4}\b"),
    re.compile(r"\b\d{1,2}-\d{4}\b"),
    re.compile(
        r"\b(?:January|February|March|April|May|June|July|August|September|October|November|December)\s+\d{4}\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\.?\s+\d{4}\b", re.IGNORECASE),
)

SPECIAL_BULLET_RE = re.compile(r"[\u2022\u2023\u25E6\u2043\u2219\u25AA\u25AB\u25CF\u25CB\u25A0\u25A1]")
IMAGE_PLACEHOLDER_RE = re.compile(r"\[image\]|\[graphic\]|\[logo\]|\[photo\]", re.IGNORECASE)

MIN_WORDS = 100
MAX_WORDS_PER_LINE = 50


def check_formatting(resume_text: str, page_count: int | None = None) -> FormattingResult:
    """Score ATS formatting compatibility, starting at 100 and deducting per issue."""
    issues: list[Issue] = []
    score = 100

    def flag(severity: str, penalty: int, message: str, suggestion: str) -> None:
        nonlocal score
        issues.append(Issue(type="formatting", severity=severity, message=message, suggestion=suggestion))
        score -= penalty

    # Contact fields
    if not EMAIL_RE.search(resume_text):
        flag(
            "critical", 15,
            "No email address detected. ATS systems require contact information to process your application.",
            "Add your email address to the top of your resume in the contact section.",
        )
    if not PHONE_RE.search(resume_text):
        flag(
            "warning", 5,
            "No phone number detected. Most ATS systems extract phone numbers as a required contact field.",
            "Add your phone number to your contact section.",
        )

    # Layout
    if any(p.search(resume_text) for p in TABLE_PATTERNS):
        flag(
            "warning", 10,
            "Possible table-based layout detected. ATS systems often fail to parse tables correctly, resulting in garbled text.",
            "Replace table layouts with simple left-aligned text and standard headings.",
        )
    if MULTI_COLUMN_RE.search(resume_text):
        flag(
            "warning", 10,
            "Possible multi-column layout detected. ATS may merge columns, scrambling your content order.",
            "Use a single-column layout for maximum ATS compatibility.",
        )

    date_families = sum(1 for p in DATE_FORMAT_FAMILIES if p.search(resume_text))
    if date_families > 1:
        flag(
            "warning", 5,
            "Inconsistent date formats detected. ATS systems may fail to parse dates in different formats.",
            "Use a consistent date format throughout your resume (e.g., 'Month YYYY' like 'January 2024').",
        )

    pages = page_count or 1
    if pages > 2:
        flag(
            "warning", 10,
            f"Resume is {pages} pages. Most ATS systems and recruiters prefer 1-2 pages. "
            "Longer resumes may have content truncated.",
            "Condense your resume to 1-2 pages by focusing on the most relevant experience.",
        )

    if len(set(SPECIAL_BULLET_RE.findall(resume_text))) > 2:
        flag(
            "info", 3,
            "Multiple special bullet characters detected. Some ATS systems may not render these correctly.",
            "Use standard hyphens (-) or asterisks (*) as bullet points for maximum compatibility.",
        )

    if len(resume_text.split()) < MIN_WORDS:
        flag(
            "critical", 20,
            "Resume appears too short (fewer than 100 words). ATS systems may flag this as incomplete.",
            "Expand your resume with detailed work experience, skills, and achievements.",
        )

    lines = [line for line in resume_text.split("\n") if line.strip()]
    if any(len(line.split()) > MAX_WORDS_PER_LINE for line in lines):
        flag(
            "info", 5,
            "Long paragraphs detected. ATS systems parse bullet points more reliably than dense paragraphs.",
            "Break long paragraphs into bullet points starting with action verbs.",
        )

    if IMAGE_PLACEHOLDER_RE.search(resume_text):
        flag(
            "critical", 15,
            "Image or graphic content detected. ATS systems cannot read images, charts, or graphics "
            "and this content will be ignored.",
            "Replace all images and graphics with plain text equivalents.",
        )

    logger.debug("Formatting check: %d issues, score %d", len(issues), max(0, score))
    return FormattingResult(score=max(0, score), issues=issues)
