"""Deterministic formatting metadata extracted from resume text.

The same extraction runs on reference resumes and on the user's resume
so the HR layer can compare the two like for like.
"""

import logging
import math
import re

from models.responses import (
    BulletStyle,
    DateFormat,
    FormattingPatterns,
    HeadingStyle,
    QuantifiedMetrics,
)
from services.formatting_checker import EMAIL_RE, PHONE_RE
from services.numeric import round_half_up

logger = logging.getLogger(__name__)

# Ordered by typical resume placement
SECTION_HEADINGS: tuple[tuple[str, re.Pattern], ...] = tuple(
    (name, re.compile(rf"^(?:{pattern})\s*$", re.IGNORECASE))
    for name, pattern in (
        ("Contact", r"contact(?:\s+info(?:rmation)?)?|personal\s+info(?:rmation)?"),
        ("Summary", r"summary|objective|profile|about\s*me|professional\s+summary|career\s+summary"
                    r"|personal\s+statement|executive\s+summary"),
        ("Experience", r"experience|employment|work\s+history|professional\s+experience|career\s+history"
                       r"|positions?\s+held|work\s+experience"),
        ("Education", r"education|academic(?:\s+background)?|degrees?|certifications?(?:\s+and\s+education)?"),
        ("Skills", r"skills|technical\s+skills|core\s+(?:competencies|skills)|proficiencies|technologies"
                   r"|tools?\s+(?:and|&)\s+technologies|expertise|key\s+skills"),
        ("Projects", r"projects|personal\s+projects|key\s+projects|selected\s+projects"),
        ("Certifications", r"certifications?|licenses?(?:\s+and\s+certifications?)?|professional\s+certifications?"),
        ("Awards", r"awards?|honors?|achievements?|recognition"),
        ("Publications", r"publications?|papers?|research"),
        ("Volunteer", r"volunteer(?:ing)?|community\s+(?:service|involvement)"),
    )
)

BULLET_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("dash", re.compile(r"^\s*[-–—]\s+")),
    ("dot", re.compile(r"^\s*[•·∙●○◦⦾]\s*")),
    ("asterisk", re.compile(r"^\s*\*\s+")),
    ("number", re.compile(r"^\s*\d+[.)]\s+")),
    ("arrow", re.compile(r"^\s*[►▸→➤»]\s*")),
)

# Start/end dates of an entry come in pairs
ENTRY_DATE_RE = re.compile(
    r"(?:\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec|January|February|March|April|May|June"
    r"|July|August|September|October|November|December)\b\s*\d{4}|\b\d{1,2}/\d{4}\b)",
    re.IGNORECASE,
)

METRIC_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\b\d{1,3}(?:,\d{3})*(?:\.\d+)?%"),
    re.compile(r"\$\d{1,3}(?:,\d{3})*(?:\.\d+)?(?:\s*[MBKmk])?"),
    re.compile(r"\b\d{1,3}(?:,\d{3})+\b"),
    re.compile(r"\b\d+x\b", re.IGNORECASE),
    re.compile(
        r"\b\d+\+?\s*(?:users?|clients?|customers?|employees?|team\s*members?|people|projects?"
        r"|applications?|servers?|repositories|repos)\b",
        re.IGNORECASE,
    ),
)
MAX_METRIC_EXAMPLES = 10

TITLE_CASE_RE = re.compile(r"^[A-Z][a-z]+(\s+[A-Z][a-z]+)*$")
SENTENCE_CASE_RE = re.compile(r"^[A-Z][a-z]")
MAX_HEADING_CHARS = 50

WORDS_PER_PAGE = 500


def _is_section_heading(line: str) -> str | None:
    for name, pattern in SECTION_HEADINGS:
        if pattern.match(line):
            return name
    return None


def detect_section_order(text: str) -> list[str]:
    """Return section names in the order their headings appear."""
    lines = text.split("\n")
    order: list[str] = []
    for line in lines:
        name = _is_section_heading(line.strip()) if line.strip() else None
        if name and name not in order:
            order.append(name)

    if "Contact" not in order:
        head = " ".join(lines[:5])
        if EMAIL_RE.search(head) or PHONE_RE.search(head):
            order.insert(0, "Contact")
    return order


def detect_bullet_style(text: str) -> BulletStyle:
    types: list[str] = []
    total = 0
    for line in text.split("\n"):
        for bullet_type, pattern in BULLET_PATTERNS:
            if pattern.match(line):
                if bullet_type not in types:
                    types.append(bullet_type)
                total += 1
                break

    dates = ENTRY_DATE_RE.findall(text)
    entries = math.ceil(len(dates) / 2) if dates else 1
    return BulletStyle(
        types=types,
        total_bullets=total,
        avg_bullets_per_entry=round_half_up(total / entries),
    )


def detect_heading_style(text: str) -> HeadingStyle:
    styles: list[str] = []
    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed or len(trimmed) > MAX_HEADING_CHARS or not _is_section_heading(trimmed):
            continue

        if trimmed == trimmed.upper() and re.search(r"[A-Z]", trimmed):
            style = "ALL_CAPS"
        elif TITLE_CASE_RE.match(trimmed):
            style = "Title Case"
        elif SENTENCE_CASE_RE.match(trimmed):
            style = "Sentence case"
        else:
            continue
        if style not in styles:
            styles.append(style)

    return HeadingStyle(styles=styles, consistent=len(styles) <= 1)


def detect_quantified_metrics(text: str) -> QuantifiedMetrics:
    examples: list[str] = []
    for pattern in METRIC_PATTERNS:
        for match in pattern.finditer(text):
            value = match.group(0)
            if len(examples) < MAX_METRIC_EXAMPLES and value not in examples:
                examples.append(value)
    return QuantifiedMetrics(count=len(examples), examples=examples)


def detect_date_formats(text: str) -> DateFormat:
    formats: list[str] = []
    if re.search(r"\b\d{1,2}/\d{4}\b", text):
        formats.append("MM/YYYY")
    if re.search(r"\b\d{1,2}-\d{4}\b", text):
        formats.append("MM-YYYY")
    if re.search(
        r"\b(?:January|February|March|April|June|July|August|September|October|November|December)\s+\d{4}\b",
        text, re.IGNORECASE,
    ):
        formats.append("Month YYYY")
    if re.search(r"\b(?:Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\.?\s+\d{4}\b", text, re.IGNORECASE):
        formats.append("Mon YYYY")
    # "May" is both the full and abbreviated name; count it as a full name
    if re.search(r"\bMay\s+\d{4}\b", text, re.IGNORECASE) and "Month YYYY" not in formats:
        formats.append("Month YYYY")
    if not formats and re.search(r"\b\d{4}\b", text):
        formats.append("YYYY")

    return DateFormat(formats=formats, consistent=len(formats) <= 1)


def extract_formatting_patterns(text: str, page_count: int | None = None) -> FormattingPatterns:
    """Extract formatting metadata from resume text."""
    lines = text.split("\n")
    has_content = bool(text.strip())
    non_empty = [line for line in lines if line.strip()]
    empty_count = len(lines) - len(non_empty) if has_content else 0

    word_count = len(text.split())
    pages = page_count if page_count is not None else max(1, math.ceil(word_count / WORDS_PER_PAGE))

    line_words = sum(len(line.split()) for line in non_empty)
    avg_words_per_line = round_half_up(line_words / len(non_empty)) if non_empty else 0

    section_order = detect_section_order(text)
    white_space_ratio = round(empty_count / len(lines), 2) if has_content else 0.0

    return FormattingPatterns(
        page_count=pages,
        section_order=section_order,
        bullet_style=detect_bullet_style(text),
        has_summary="Summary" in section_order,
        quantified_metrics=detect_quantified_metrics(text),
        heading_style=detect_heading_style(text),
        white_space_ratio=white_space_ratio,
        date_format=detect_date_formats(text),
        word_count=word_count,
        avg_words_per_line=avg_words_per_line,
    )
