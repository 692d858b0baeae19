"""Resume section detection, segmentation and contact extraction."""

import logging
import re

from models.responses import ResumeSection, SectionResult, SectionStatus
from services.formatting_checker import EMAIL_RE, PHONE_RE
from services.numeric import round_half_up

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ATS section validation: the five sections every ATS expects. Patterns
# search the whole text, so an inline mention is enough.
# ---------------------------------------------------------------------------
STANDARD_SECTIONS: tuple[tuple[str, re.Pattern], ...] = (
    ("Contact", re.compile(
        r"(?:email|phone|address|linkedin|github|portfolio|contact|website|www\.|@)",
        re.IGNORECASE,
    )),
    ("Summary", re.compile(
        r"(?:summary|objective|profile|about\s*me|professional\s+summary|career\s+summary|personal\s+statement)",
        re.IGNORECASE,
    )),
    ("Experience", re.compile(
        r"(?:experience|employment|work\s+history|professional\s+experience|career\s+history|positions?\s+held)",
        re.IGNORECASE,
    )),
    ("Education", re.compile(
        r"(?:education|academic|university|college|degree|bachelor|master|phd|mba|diploma|certifications?)",
        re.IGNORECASE,
    )),
    ("Skills", re.compile(
        r"(?:skills|technical\s+skills|competencies|proficiencies|technologies|tools|expertise|core\s+skills)",
        re.IGNORECASE,
    )),
)

CONTACT_SCAN_LINES = 5

# ---------------------------------------------------------------------------
# Heading lines used to split a resume into sections for embedding. A
# heading must sit on its own line, optionally followed by a colon.
# ---------------------------------------------------------------------------
SECTION_HEADINGS: dict[str, list[str]] = {
    "summary": [
        r"summary", r"objective", r"profile", r"about\s*me",
        r"professional\s+summary", r"career\s+summary",
        r"personal\s+statement", r"executive\s+summary",
    ],
    "experience": [
        r"experience", r"employment", r"work\s+history",
        r"professional\s+experience", r"career\s+history",
        r"positions?\s+held", r"work\s+experience",
    ],
    "education": [
        r"education", r"academic", r"academic\s+background",
        r"educational\s+background", r"degrees?",
    ],
    "skills": [
        r"skills", r"technical\s+skills", r"competencies", r"proficiencies",
        r"technologies", r"tools", r"expertise", r"core\s+skills",
        r"key\s+skills", r"areas?\s+of\s+expertise",
    ],
    "projects": [
        r"projects", r"personal\s+projects", r"key\s+projects",
    ],
    "certifications": [
        r"certifications?", r"licenses?", r"credentials?",
        r"certifications?\s*(?:&|and)\s*licenses?",
    ],
}

# Compile all patterns into a single regex per section
_HEADING_RES: tuple[tuple[str, re.Pattern], ...] = tuple(
    (name, re.compile(rf"^(?:{'|'.join(patterns)})\s*:?\s*$", re.IGNORECASE))
    for name, patterns in SECTION_HEADINGS.items()
)

LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)


def _has_contact_header(text: str) -> bool:
    head = "\n".join(text.split("\n")[:CONTACT_SCAN_LINES])
    return bool(EMAIL_RE.search(head) or PHONE_RE.search(head))


def validate_sections(resume_text: str) -> SectionResult:
    """Check which of the five standard sections an ATS could detect.

    Always returns all five entries in a fixed order; each found section
    is worth 20 points.
    """
    sections: list[SectionStatus] = []
    for name, pattern in STANDARD_SECTIONS:
        found = bool(pattern.search(resume_text))
        if name == "Contact" and not found:
            found = _has_contact_header(resume_text)
        sections.append(SectionStatus(name=name, found=found))

    found_count = sum(1 for s in sections if s.found)
    score = round_half_up(found_count / len(STANDARD_SECTIONS) * 100)
    return SectionResult(score=score, sections=sections)


def _match_heading(line: str) -> str | None:
    stripped = line.strip()
    if not stripped:
        return None
    for name, pattern in _HEADING_RES:
        if pattern.match(stripped):
            return name
    return None


def split_into_sections(text: str) -> list[ResumeSection]:
    """Split resume text into named sections based on heading lines.

    Text before the first heading becomes 'header'. When no heading is
    found the whole text is returned as a single 'full' section. Sections
    with no content are dropped.
    """
    sections: list[ResumeSection] = []
    current: str | None = None
    current_lines: list[str] = []
    header_lines: list[str] = []

    def flush(name: str, lines: list[str]) -> None:
        content = "\n".join(lines).strip()
        if content:
            sections.append(ResumeSection(name=name, content=content))

    for line in text.split("\n"):
        heading = _match_heading(line)
        if heading:
            if current is None:
                flush("header", header_lines)
            else:
                flush(current, current_lines)
            current = heading
            current_lines = []
        elif current is None:
            header_lines.append(line)
        else:
            current_lines.append(line)

    if current is None:
        flush("full", [text])
    else:
        flush(current, current_lines)

    logger.debug("Split resume into sections: %s", [s.name for s in sections])
    return sections


def extract_contact_info(text: str) -> dict[str, str | None]:
    """Extract email, phone, LinkedIn and GitHub handles from resume text."""
    email_match = EMAIL_RE.search(text)
    phone_match = PHONE_RE.search(text)
    linkedin_match = LINKEDIN_RE.search(text)
    github_match = GITHUB_RE.search(text)

    return {
        "email": email_match.group() if email_match else None,
        "phone": phone_match.group().strip() if phone_match else None,
        "linkedin": linkedin_match.group() if linkedin_match else None,
        "github": github_match.group() if github_match else None,
    }
