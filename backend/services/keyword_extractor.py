"""Keyword extraction and matching for resume-JD analysis.

Keywords come from a job description in two passes: a curated catalogue
of multi-word technical phrases, then frequency-ranked single words with
posting boilerplate removed. Matching has two separate
modes: strict word-boundary matching that behaves like a real ATS, and a
lenient stem-aware mode reserved for the HR layer.
"""

import logging
import re
from collections import Counter

from models.responses import KeywordAnalysis, MatchResult
from services.numeric import round_half_up
from services.stemmer import stem

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Stop words: function words plus job-posting boilerplate that is never
# a skill or requirement
# ---------------------------------------------------------------------------
STOP_WORDS: frozenset[str] = frozenset({
    # Common English words
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "shall", "can", "need", "must",
    "about", "above", "after", "again", "all", "also", "am", "any", "because",
    "before", "between", "both", "during", "each", "few", "further", "get",
    "got", "he", "her", "here", "him", "his", "how", "i", "if", "into", "it",
    "its", "just", "let", "like", "me", "more", "most", "my", "no", "nor",
    "not", "now", "only", "other", "our", "out", "over", "own", "same", "she",
    "so", "some", "such", "than", "that", "their", "them", "then", "there",
    "these", "they", "this", "those", "through", "too", "under", "until", "up",
    "us", "very", "we", "what", "when", "where", "which", "while", "who",
    "whom", "why", "you", "your", "able", "across", "already", "among",
    "around", "become", "within", "without", "work", "working", "including",
    "well", "using", "used", "use", "new", "make", "ensure", "based",
    "related", "per", "via", "etc", "e.g", "i.e",
    # Job posting filler
    "experience", "role", "position", "team", "company", "opportunity",
    "responsibilities", "requirements", "qualifications", "candidate",
    "looking", "join", "apply", "ideal", "required", "preferred", "plus",
    "strong", "excellent", "proven", "ability", "skills", "knowledge",
    "understanding", "years", "minimum", "bachelor", "master", "degree",
    # Locations
    "san", "francisco", "york", "los", "angeles", "chicago", "denver",
    "seattle", "austin", "boston", "atlanta", "dallas", "houston", "remote",
    "hybrid", "onsite", "on-site", "location", "located", "area",
    "region", "city", "state", "headquarters", "hq", "office", "bay",
    "california", "texas", "washington", "florida", "virginia", "colorado",
    "massachusetts", "georgia", "illinois", "oregon", "arizona", "carolina",
    # Compensation & benefits
    "salary", "salaries", "equity", "compensation", "bonus", "bonuses",
    "benefits", "perks", "package", "stock", "options", "rrsp", "401k",
    "pension", "insurance", "health", "dental", "vision", "pto", "vacation",
    "competitive", "range", "annual", "base", "total", "hourly", "pay",
    # Posting metadata
    "posting", "posted", "applying", "application", "submit",
    "deadline", "asap", "immediately", "urgent", "available", "seeking",
    "hiring", "opportunities", "opening", "openings", "requisition",
    "employment", "employer", "employee", "employees", "staff", "workforce",
    # Generic verbs and fillers
    "approximately", "circa", "includes", "similar",
    "desired", "nice", "preparation", "assist", "support", "help",
    "provide", "create", "develop", "implement", "maintain", "manage",
    "build", "drive", "deliver", "execute", "lead", "partner", "collaborate",
    "effectively", "efficiently", "successfully", "consistently", "regularly",
})

# Two-letter tokens that are real technical terms
SHORT_TECH_TERMS: frozenset[str] = frozenset({
    "ai", "ml", "ui", "ux", "qa", "ci", "cd", "db", "os", "it", "bi", "hr",
})

# Known multi-word technical phrases, scanned in this order
MULTI_WORD_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"machine\s+learning",
        r"deep\s+learning",
        r"artificial\s+intelligence",
        r"natural\s+language\s+processing",
        r"computer\s+vision",
        r"data\s+science",
        r"data\s+engineering",
        r"data\s+analysis",
        r"data\s+analytics",
        r"data\s+pipeline",
        r"data\s+warehouse",
        r"data\s+modeling",
        r"project\s+management",
        r"product\s+management",
        r"full\s+stack",
        r"front\s+end",
        r"back\s+end",
        r"user\s+experience",
        r"user\s+interface",
        r"quality\s+assurance",
        r"continuous\s+integration",
        r"continuous\s+delivery",
        r"continuous\s+deployment",
        r"version\s+control",
        r"cloud\s+computing",
        r"software\s+engineering",
        r"software\s+development",
        r"web\s+development",
        r"mobile\s+development",
        r"api\s+development",
        r"test\s+driven",
        r"cross[\s-]+functional",
        r"object[\s-]+oriented",
        r"event[\s-]+driven",
        r"micro[\s-]?services",
        r"rest(?:ful)?\s+api",
        r"supply\s+chain",
        r"business\s+intelligence",
        r"business\s+analysis",
        r"customer\s+service",
        r"customer\s+success",
        r"human\s+resources",
        r"real[\s-]+time",
        r"open[\s-]+source",
        r"unit\s+test(?:ing|s)?",
        r"end[\s-]+to[\s-]+end",
        r"a/b\s+test(?:ing|s)?",
        r"ci[\s/]+cd",
    )
)

_NON_TOKEN_RE = re.compile(r"[^a-z0-9\s\-/+#]")
_EDGE_PUNCT_RE = re.compile(r"^[-/#+]+|[-/#+]+$")


def tokenize(text: str) -> list[str]:
    """Split text into lowercase tokens.

    Inner symbols survive ("ci/cd", "node-js"); leading and trailing ones
    are stripped. Single characters and pure numbers are dropped.
    """
    tokens = []
    for raw in _NON_TOKEN_RE.sub(" ", text.lower()).split():
        token = _EDGE_PUNCT_RE.sub("", raw)
        if len(token) <= 1 or token.isdigit():
            continue
        tokens.append(token)
    return tokens


def _extract_phrases(text: str) -> list[str]:
    phrases: list[str] = []
    for pattern in MULTI_WORD_PATTERNS:
        for match in pattern.finditer(text):
            normalized = " ".join(match.group(0).lower().split())
            if normalized not in phrases:
                phrases.append(normalized)
    return phrases


def extract_keywords(job_description: str) -> list[str]:
    """Extract significant keywords and phrases from a job description.

    Multi-word phrases come first in catalogue order, followed by single
    words ranked by frequency. Words already covered by a phrase are
    skipped.
    """
    text = job_description.lower()
    phrases = _extract_phrases(text)

    freq: Counter[str] = Counter()
    for word in tokenize(text):
        if word in STOP_WORDS:
            continue
        if len(word) <= 2 and word not in SHORT_TECH_TERMS:
            continue
        freq[word] += 1

    # most_common keeps first-seen order for ties
    ranked = [word for word, _ in freq.most_common()]

    phrase_words = {w for phrase in phrases for w in phrase.split()}
    keywords = phrases + [w for w in ranked if w not in phrase_words]

    logger.debug("Extracted %d keywords (%d phrases)", len(keywords), len(phrases))
    return keywords


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def _bounded(term: str) -> re.Pattern:
    # Lookarounds instead of \b so terms like "c++" still get boundaries
    return re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", re.IGNORECASE)


def _match_strict(keyword: str, resume_text: str) -> bool:
    words = keyword.split()
    if len(words) <= 1:
        return bool(_bounded(keyword).search(resume_text))
    return all(_bounded(w).search(resume_text) for w in words)


def _match_fuzzy(keyword: str, resume_lower: str, resume_stems: set[str]) -> bool:
    if keyword.lower() in resume_lower:
        return True
    words = keyword.lower().split()
    if len(words) > 1:
        return all(w in resume_lower or stem(w) in resume_stems for w in words)
    return stem(keyword) in resume_stems


def match_keywords(resume_text: str, keywords: list[str], strict_mode: bool = True) -> MatchResult:
    """Match JD keywords against resume text.

    Strict mode (default) only accepts whole-word, case-insensitive hits
    with no stemming, the way Workday, Greenhouse or Taleo behave. Fuzzy
    mode also accepts substrings and stem matches and is meant for HR
    coaching, never for ATS scoring.
    """
    unique = list(dict.fromkeys(keywords))
    if not unique:
        return MatchResult(matched=[], missing=[], match_pct=100)

    resume_lower = resume_text.lower()
    resume_stems: set[str] = set()
    if not strict_mode:
        resume_stems = {stem(t) for t in tokenize(resume_text)}

    matched: list[str] = []
    missing: list[str] = []
    for keyword in unique:
        if strict_mode:
            hit = _match_strict(keyword, resume_text)
        else:
            hit = _match_fuzzy(keyword, resume_lower, resume_stems)
        (matched if hit else missing).append(keyword)

    match_pct = round_half_up(len(matched) / len(unique) * 100)
    return MatchResult(matched=matched, missing=missing, match_pct=match_pct)


def analyze_keywords(resume_text: str, jd_keywords: list[str]) -> KeywordAnalysis:
    """Measure how densely and how early JD keywords appear in a resume."""
    lower = resume_text.lower()
    word_count = len(resume_text.split())
    first_half = lower[: len(lower) // 2]

    found: list[str] = []
    missing: list[str] = []
    occurrences = 0
    in_first_half = 0

    for keyword in jd_keywords:
        kw = keyword.lower()
        if kw in lower:
            found.append(keyword)
            occurrences += lower.count(kw)
            if kw in first_half:
                in_first_half += 1
        else:
            missing.append(keyword)

    density = occurrences / word_count * 100 if word_count else 0.0
    first_half_pct = in_first_half / len(found) * 100 if found else 0.0

    return KeywordAnalysis(
        jd_keywords_found=found,
        jd_keywords_missing=missing,
        keyword_density=density,
        keyword_in_first_half=first_half_pct,
    )
