from typing import Literal

from pydantic import BaseModel, ConfigDict

from models.schemas.structured_resume import StructuredResume
from models.schemas.template_style import TemplateStyle

Severity = Literal["critical", "warning", "info"]
JobType = Literal["tech", "senior", "entry", "general"]


# ---------------------------------------------------------------------------
# ATS layer
# ---------------------------------------------------------------------------

class Issue(BaseModel):
    type: Literal["formatting", "section"] = "formatting"
    severity: Severity = "warning"
    message: str
    suggestion: str = ""


class MatchResult(BaseModel):
    matched: list[str] = []
    missing: list[str] = []
    match_pct: int = 100


class FormattingResult(BaseModel):
    score: int = 100
    issues: list[Issue] = []


class SectionStatus(BaseModel):
    name: str
    found: bool = False


class SectionResult(BaseModel):
    score: int = 0
    sections: list[SectionStatus] = []


class WeightProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    keywords: float
    formatting: float
    sections: float


class ATSScore(BaseModel):
    overall: int = 0
    keyword_match_pct: int = 0
    formatting_score: int = 0
    section_score: int = 0
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    issues: list[Issue] = []
    passed: bool = False


class ATSAnalysisResult(ATSScore):
    job_type: JobType = "general"
    weights: WeightProfile


# ---------------------------------------------------------------------------
# Semantic layer
# ---------------------------------------------------------------------------

class ResumeSection(BaseModel):
    name: str
    content: str


class SectionEmbedding(BaseModel):
    section: str
    embedding: list[float]
    content: str


class SemanticSectionScore(BaseModel):
    section: str
    score: int


class SemanticScore(BaseModel):
    overall_score: int = 0
    section_scores: list[SemanticSectionScore] = []


class SemanticAnalysisResult(BaseModel):
    score: SemanticScore
    resume_embeddings: list[SectionEmbedding] = []
    jd_embedding: list[float] = []


# ---------------------------------------------------------------------------
# Visa detection
# ---------------------------------------------------------------------------

class UserContext(BaseModel):
    target_role: str | None = None
    years_experience: str | None = None
    visa_status: str | None = None


class VisaSignalResult(BaseModel):
    visa_flagged: bool = False
    signals: list[str] = []


# ---------------------------------------------------------------------------
# Formatting patterns (snapshots are immutable; recompute instead of mutating)
# ---------------------------------------------------------------------------

class BulletStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    types: list[str] = []  # dash, dot, asterisk, number, arrow
    avg_bullets_per_entry: int = 0
    total_bullets: int = 0


class QuantifiedMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    examples: list[str] = []


class HeadingStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    consistent: bool = True
    styles: list[str] = []  # ALL_CAPS, Title Case, Sentence case


class DateFormat(BaseModel):
    model_config = ConfigDict(frozen=True)

    formats: list[str] = []
    consistent: bool = True


class FormattingPatterns(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_count: int = 1
    section_order: list[str] = []
    bullet_style: BulletStyle = BulletStyle()
    has_summary: bool = False
    quantified_metrics: QuantifiedMetrics = QuantifiedMetrics()
    heading_style: HeadingStyle = HeadingStyle()
    white_space_ratio: float = 0.0  # empty lines / total lines
    date_format: DateFormat = DateFormat()
    word_count: int = 0
    avg_words_per_line: int = 0


# ---------------------------------------------------------------------------
# Content patterns
# ---------------------------------------------------------------------------

class ActionVerbs(BaseModel):
    model_config = ConfigDict(frozen=True)

    verbs: list[str] = []
    strong_verb_count: int = 0
    weak_verb_count: int = 0
    verb_diversity: float = 0.0  # unique verbs / total verbs


class Quantification(BaseModel):
    model_config = ConfigDict(frozen=True)

    metrics_count: int = 0
    metric_types: list[str] = []
    avg_metrics_per_bullet: float = 0.0
    examples: list[str] = []


class KeywordAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    jd_keywords_found: list[str] = []
    jd_keywords_missing: list[str] = []
    keyword_density: float = 0.0  # occurrences per 100 words
    keyword_in_first_half: float = 0.0  # % of found keywords in the top half


class Achievements(BaseModel):
    model_config = ConfigDict(frozen=True)

    results_first_count: int = 0
    car_format_count: int = 0
    impact_statements: list[str] = []


class ContentStructure(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary_length: int = 0
    bullet_count: int = 0
    avg_bullet_length: int = 0
    section_order: list[str] = []
    experience_entries: int = 0


class ContentPatterns(BaseModel):
    model_config = ConfigDict(frozen=True)

    action_verbs: ActionVerbs = ActionVerbs()
    quantification: Quantification = Quantification()
    keywords: KeywordAnalysis | None = None
    achievements: Achievements = Achievements()
    structure: ContentStructure = ContentStructure()


class PatternComparison(BaseModel):
    metric: str
    user_value: float
    ref_value: float
    delta: float
    insight: str


class PatternsResponse(BaseModel):
    formatting: FormattingPatterns
    content: ContentPatterns
    comparisons: list[PatternComparison] = []


# ---------------------------------------------------------------------------
# Contrastive analysis (successful vs rejected examples)
# ---------------------------------------------------------------------------

Importance = Literal["high", "medium", "low"]


class ContrastiveInsight(BaseModel):
    pattern: str
    metric: str
    positive_avg: float
    negative_avg: float
    delta: float
    percent_diff: int
    insight: str
    importance: Importance
    confidence: float


class ContrastiveAnalysisResult(BaseModel):
    has_contrastive_data: bool = False
    positive_count: int = 0
    negative_count: int = 0
    insights: list[ContrastiveInsight] = []
    summary: str = ""


class LearnedSuggestion(BaseModel):
    type: str
    message: str
    importance: Importance
    source: Literal["learned"] = "learned"


class ContrastiveReport(BaseModel):
    analysis: ContrastiveAnalysisResult
    suggestions: list[LearnedSuggestion] = []


# ---------------------------------------------------------------------------
# HR formatting analysis
# ---------------------------------------------------------------------------

class FormattingSuggestion(BaseModel):
    aspect: str
    user_value: str
    reference_value: str
    percentage_support: int  # e.g. 85 means "85% of successful resumes"
    message: str
    severity: Severity = "warning"


class HRFeedback(BaseModel):
    type: Literal["formatting"] = "formatting"
    layer: int = 1
    severity: Severity = "warning"
    message: str
    suggestion: str | None = None


class FormattingAnalysisResult(BaseModel):
    score: int = 100
    suggestions: list[FormattingSuggestion] = []
    feedback: list[HRFeedback] = []
    user_patterns: FormattingPatterns
    reference_count: int = 0


# ---------------------------------------------------------------------------
# One-page fitting
# ---------------------------------------------------------------------------

class FitResult(BaseModel):
    fitted_resume: StructuredResume
    adjusted_style: TemplateStyle
    removed_content: list[str] = []
    fit_confidence: int = 95  # 0-100, how confident we are it fits
