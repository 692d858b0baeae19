"""Content pattern extraction: verbs, metrics, achievement framing, structure.

These patterns describe how a resume is written rather than how it is
laid out, and feed the coaching comparison against known-successful
examples.
"""

import logging
import math
import re

from models.responses import (
    Achievements,
    ActionVerbs,
    ContentPatterns,
    ContentStructure,
    PatternComparison,
    Quantification,
)
from services.formatting_patterns import SECTION_HEADINGS
from services.keyword_extractor import analyze_keywords
from services.numeric import round_half_up, round_one_decimal

logger = logging.getLogger(__name__)

STRONG_VERBS: frozenset[str] = frozenset({
    # Leadership
    "led", "directed", "managed", "supervised", "orchestrated", "spearheaded",
    "championed", "pioneered", "drove", "headed", "oversaw",
    # Achievement
    "achieved", "exceeded", "surpassed", "delivered", "accomplished",
    "attained", "secured", "won", "earned",
    # Growth
    "increased", "improved", "boosted", "enhanced", "elevated", "grew",
    "expanded", "accelerated", "maximized", "optimized", "streamlined",
    # Creation
    "created", "developed", "designed", "built", "established", "launched",
    "initiated", "introduced", "implemented", "engineered", "architected",
    # Transformation
    "transformed", "revamped", "restructured", "modernized", "revolutionized",
    "overhauled", "reengineered", "redesigned",
    # Analysis
    "analyzed", "evaluated", "assessed", "identified", "discovered",
    "formulated", "devised", "strategized",
    # Collaboration
    "partnered", "collaborated", "negotiated", "influenced", "persuaded",
    "mentored", "coached", "trained",
    # Cost / revenue
    "reduced", "saved", "cut", "generated", "produced", "captured",
})

WEAK_VERBS: frozenset[str] = frozenset({
    "helped", "assisted", "worked", "supported", "contributed", "participated",
    "involved", "responsible", "handled", "dealt", "used", "utilized",
    "did", "made", "got", "had", "was", "were", "been", "being",
    "served", "provided", "performed", "conducted", "completed",
    "maintained", "ensured", "facilitated",
})

# A bullet leads with its outcome when any of these match
RESULT_INDICATORS: tuple[re.Pattern, ...] = (
    re.compile(
        r"^(?:achieved|delivered|generated|saved|reduced|increased|improved|grew|boosted|cut|drove|secured)",
        re.IGNORECASE,
    ),
    re.compile(r"^\d+%"),
    re.compile(r"^\$[\d,]+"),
    re.compile(r"^(?:resulting|leading|driving)\s+(?:in|to)", re.IGNORECASE),
    re.compile(r"(?:by|to)\s+\d+%"),
)

# Challenge-Action-Result framing
CAR_CHALLENGE = re.compile(
    r"(?:faced|addressed|tackled|confronted|dealt with|responding to|in response to|challenged by|given|when)",
    re.IGNORECASE,
)
CAR_ACTION = re.compile(
    r"(?:implemented|developed|created|designed|built|established|led|managed|executed)",
    re.IGNORECASE,
)
CAR_RESULT = re.compile(
    r"(?:resulting in|leading to|which|achieving|delivered|saved|reduced|increased|improved)",
    re.IGNORECASE,
)

METRIC_TYPES: tuple[tuple[str, re.Pattern], ...] = (
    ("percentage", re.compile(r"\b\d{1,3}(?:\.\d+)?%")),
    ("dollar", re.compile(r"\$\d{1,3}(?:,\d{3})*(?:\.\d+)?(?:\s*[MBKmk](?:illion)?)?")),
    ("multiplier", re.compile(r"\b\d+(?:\.\d+)?x\b", re.IGNORECASE)),
    ("time", re.compile(r"\b\d+(?:\+)?\s*(?:hours?|days?|weeks?|months?|years?)\b", re.IGNORECASE)),
    ("headcount", re.compile(
        r"\b\d+(?:\+)?\s*(?:engineers?|developers?|team\s*members?|employees?|people|reports?|direct\s*reports?)\b",
        re.IGNORECASE,
    )),
    ("count", re.compile(r"\b\d{1,3}(?:,\d{3})+\b")),
    ("users", re.compile(
        r"\b\d+(?:\+|k|K|m|M)?\s*(?:users?|customers?|clients?|subscribers?|visitors?|downloads?)\b",
        re.IGNORECASE,
    )),
)

BULLET_LINE_RE = re.compile(r"^[-–—•·∙●○◦⦾*►▸→➤»]\s+|^\d+[.)]\s+")
BULLET_PREFIX_RE = re.compile(r"^\s*[-–—•·∙●○◦⦾*►▸→➤»\d.)]+\s*")

SUMMARY_RE = re.compile(
    r"(?:summary|objective|profile|about\s*me|professional\s+summary)[\s\S]*?(?=\n(?:experience|education|skills)|$)",
    re.IGNORECASE,
)
ENTRY_DATE_RE = re.compile(
    r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec|January|February|March|April|June|July"
    r"|August|September|October|November|December)\b\s*\d{4}",
    re.IGNORECASE,
)

# Awards, Publications and Volunteer only matter for layout
CONTENT_SECTIONS = tuple(h for h in SECTION_HEADINGS if h[0] not in {"Awards", "Publications", "Volunteer"})

MAX_STRONG_VERBS = 20
MAX_METRIC_EXAMPLES = 15
MAX_IMPACT_STATEMENTS = 5
IMPACT_PREVIEW_CHARS = 100


def _bullet_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if BULLET_LINE_RE.match(line.strip())]


def _strip_bullet(line: str) -> str:
    return BULLET_PREFIX_RE.sub("", line).strip()


def extract_action_verbs(text: str) -> ActionVerbs:
    all_verbs: list[str] = []
    strong: list[str] = []
    weak: list[str] = []

    for line in _bullet_lines(text):
        words = _strip_bullet(line).split()
        if not words:
            continue
        first = re.sub(r"[^a-z]", "", words[0].lower())
        if len(first) <= 2:
            continue
        all_verbs.append(first)
        if first in STRONG_VERBS:
            strong.append(words[0])
        elif first in WEAK_VERBS:
            weak.append(words[0])

    return ActionVerbs(
        verbs=list(dict.fromkeys(strong))[:MAX_STRONG_VERBS],
        strong_verb_count=len(strong),
        weak_verb_count=len(weak),
        verb_diversity=len(set(all_verbs)) / len(all_verbs) if all_verbs else 0.0,
    )


def extract_quantification(text: str) -> Quantification:
    bullets = _bullet_lines(text)
    metric_types: list[str] = []
    examples: list[str] = []
    total = 0

    for metric_type, pattern in METRIC_TYPES:
        matches = [m.group(0) for m in pattern.finditer(text)]
        if not matches:
            continue
        metric_types.append(metric_type)
        total += len(matches)
        for m in matches:
            if len(examples) < MAX_METRIC_EXAMPLES and m not in examples:
                examples.append(m)

    return Quantification(
        metrics_count=total,
        metric_types=metric_types,
        avg_metrics_per_bullet=total / len(bullets) if bullets else 0.0,
        examples=examples,
    )


def analyze_achievements(text: str) -> Achievements:
    results_first = 0
    car_count = 0
    impact: list[str] = []

    for line in _bullet_lines(text):
        cleaned = _strip_bullet(line)

        if any(p.search(cleaned) for p in RESULT_INDICATORS):
            results_first += 1
            if len(impact) < MAX_IMPACT_STATEMENTS:
                preview = cleaned[:IMPACT_PREVIEW_CHARS]
                if len(cleaned) > IMPACT_PREVIEW_CHARS:
                    preview += "..."
                impact.append(preview)

        has_result = bool(CAR_RESULT.search(cleaned))
        if has_result and (CAR_CHALLENGE.search(cleaned) or CAR_ACTION.search(cleaned)):
            car_count += 1

    return Achievements(
        results_first_count=results_first,
        car_format_count=car_count,
        impact_statements=impact,
    )


def analyze_structure(text: str) -> ContentStructure:
    bullets = _bullet_lines(text)

    order: list[str] = []
    for line in text.split("\n"):
        trimmed = line.strip()
        for name, pattern in CONTENT_SECTIONS:
            if pattern.match(trimmed):
                if name not in order:
                    order.append(name)
                break

    summary_match = SUMMARY_RE.search(text)
    summary_length = len(summary_match.group(0).split()) if summary_match else 0

    dates = ENTRY_DATE_RE.findall(text)
    bullet_words = sum(len(_strip_bullet(line).split()) for line in bullets)

    return ContentStructure(
        summary_length=summary_length,
        bullet_count=len(bullets),
        avg_bullet_length=round_half_up(bullet_words / len(bullets)) if bullets else 0,
        section_order=order,
        experience_entries=math.ceil(len(dates) / 2),
    )


def extract_content_patterns(resume_text: str, jd_keywords: list[str] | None = None) -> ContentPatterns:
    """Extract all content patterns; keyword analysis only when JD keywords are given."""
    return ContentPatterns(
        action_verbs=extract_action_verbs(resume_text),
        quantification=extract_quantification(resume_text),
        achievements=analyze_achievements(resume_text),
        structure=analyze_structure(resume_text),
        keywords=analyze_keywords(resume_text, jd_keywords) if jd_keywords else None,
    )


def compare_patterns(user: ContentPatterns, reference: ContentPatterns) -> list[PatternComparison]:
    """List the content differences between a resume and a successful reference."""
    comparisons: list[PatternComparison] = []

    user_metrics = user.quantification.avg_metrics_per_bullet
    ref_metrics = reference.quantification.avg_metrics_per_bullet
    if ref_metrics > 0:
        if user_metrics < ref_metrics:
            insight = (
                f"Add more quantified metrics. Successful resumes average {ref_metrics:.1f} "
                f"metrics per bullet (you have {user_metrics:.1f})."
            )
        else:
            insight = f"Your quantification is strong with {user_metrics:.1f} metrics per bullet."
        comparisons.append(PatternComparison(
            metric="metrics_per_bullet",
            user_value=round_one_decimal(user_metrics),
            ref_value=round_one_decimal(ref_metrics),
            delta=round_one_decimal(user_metrics - ref_metrics),
            insight=insight,
        ))

    weak = user.action_verbs.weak_verb_count
    if weak > 0:
        comparisons.append(PatternComparison(
            metric="weak_verbs",
            user_value=weak,
            ref_value=0,
            delta=-weak,
            insight=f"Replace {weak} weak verbs (helped, assisted, worked) with strong action verbs.",
        ))

    def results_first_pct(p: ContentPatterns) -> float:
        bullets = p.structure.bullet_count
        return p.achievements.results_first_count / bullets * 100 if bullets else 0.0

    user_pct = results_first_pct(user)
    ref_pct = results_first_pct(reference)
    if ref_pct > user_pct:
        comparisons.append(PatternComparison(
            metric="results_first_pct",
            user_value=round_half_up(user_pct),
            ref_value=round_half_up(ref_pct),
            delta=round_half_up(user_pct - ref_pct),
            insight=(
                f"Lead more bullets with results. Successful resumes start {round_half_up(ref_pct)}% "
                f"of bullets with outcomes (you: {round_half_up(user_pct)}%)."
            ),
        ))

    user_div = user.action_verbs.verb_diversity
    ref_div = reference.action_verbs.verb_diversity
    if user_div < 0.5 and ref_div > user_div:
        comparisons.append(PatternComparison(
            metric="verb_diversity",
            user_value=round_half_up(user_div * 100),
            ref_value=round_half_up(ref_div * 100),
            delta=round_half_up(user_div * 100 - ref_div * 100),
            insight="Vary your action verbs more. You're repeating the same verbs too often.",
        ))

    logger.debug("Pattern comparison produced %d insights", len(comparisons))
    return comparisons
