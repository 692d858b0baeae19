"""Contrastive analysis of successful vs rejected resume examples.

Given content patterns from resumes that succeeded and resumes that were
rejected for similar jobs, find the measurable differences between the two
groups and turn the significant ones into coaching suggestions.
"""

import logging

from models.responses import (
    ContentPatterns,
    ContrastiveAnalysisResult,
    ContrastiveInsight,
    Importance,
    LearnedSuggestion,
)
from services.numeric import round_half_up, round_one_decimal

logger = logging.getLogger(__name__)

# (minimum samples on the smaller side, confidence)
CONFIDENCE_STEPS: tuple[tuple[int, float], ...] = (
    (1, 0.3),
    (2, 0.5),
    (5, 0.7),
    (10, 0.85),
)
MAX_CONFIDENCE = 0.95

SIGNIFICANT_PCT_DIFF = 50
HIGH_CONFIDENCE = 0.7

IMPORTANCE_ORDER = {"high": 0, "medium": 1, "low": 2}

# A user trails the successful average when below this fraction of it
RELEVANCE_RATIO = 0.8
WEAK_VERB_RATIO = 1.2
BULLET_COUNT_TOLERANCE = 5


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _confidence(positive_count: int, negative_count: int) -> float:
    smallest = min(positive_count, negative_count)
    if smallest == 0:
        return 0.0
    for limit, confidence in CONFIDENCE_STEPS:
        if smallest <= limit:
            return confidence
    return MAX_CONFIDENCE


def _importance(percent_diff: float, confidence: float) -> Importance:
    significant = abs(percent_diff) > SIGNIFICANT_PCT_DIFF
    confident = confidence >= HIGH_CONFIDENCE
    if significant and confident:
        return "high"
    if significant or confident:
        return "medium"
    return "low"


def _pct_change(delta: float, base: float, fallback: float) -> float:
    return delta / base * 100 if base > 0 else fallback


def analyze_contrastive_patterns(
    positive: list[ContentPatterns],
    negative: list[ContentPatterns],
) -> ContrastiveAnalysisResult:
    """Compare successful (positive) and rejected (negative) examples.

    Both groups must be non-empty. Insights are ordered high, medium, low
    importance; confidence grows with the size of the smaller group.
    """
    pos_count, neg_count = len(positive), len(negative)
    if not pos_count or not neg_count:
        missing = "successful" if not pos_count else "rejected"
        return ContrastiveAnalysisResult(
            positive_count=pos_count,
            negative_count=neg_count,
            summary=f"No {missing} examples available for comparison.",
        )

    confidence = _confidence(pos_count, neg_count)
    insights: list[ContrastiveInsight] = []

    def averages(getter) -> tuple[float, float]:
        return _average([getter(p) for p in positive]), _average([getter(p) for p in negative])

    def add(pattern, metric, pos, neg, delta, percent_diff, insight, importance):
        insights.append(ContrastiveInsight(
            pattern=pattern,
            metric=metric,
            positive_avg=pos,
            negative_avg=neg,
            delta=delta,
            percent_diff=round_half_up(percent_diff),
            insight=insight,
            importance=importance,
            confidence=confidence,
        ))

    # Metrics per bullet
    pos, neg = averages(lambda p: p.quantification.avg_metrics_per_bullet)
    delta = pos - neg
    pct = _pct_change(delta, neg, 100 if pos > 0 else 0)
    if abs(delta) > 0.1 or pos > 0.3:
        if delta > 0:
            text = f"Successful resumes have {pos / max(neg, 0.1):.1f}x more metrics per bullet point."
        else:
            text = "Quantification levels are similar between successful and rejected resumes."
        add("quantification", "metrics_per_bullet", round_one_decimal(pos), round_one_decimal(neg),
            round_one_decimal(delta), pct, text, _importance(pct, confidence))

    # Total metrics
    pos, neg = averages(lambda p: p.quantification.metrics_count)
    delta = pos - neg
    pct = _pct_change(delta, neg, 100 if pos > 0 else 0)
    if abs(delta) > 2:
        add("quantification", "total_metrics", round_half_up(pos), round_half_up(neg), round_half_up(delta), pct,
            f"Successful resumes contain {round_half_up(pos)} metrics on average "
            f"vs {round_half_up(neg)} in rejected ones.",
            _importance(pct, confidence))

    # Strong verbs
    pos, neg = averages(lambda p: p.action_verbs.strong_verb_count)
    if pos - neg > 2:
        add("action_verbs", "strong_verbs", round_half_up(pos), round_half_up(neg), round_half_up(pos - neg),
            _pct_change(pos - neg, neg, 100),
            f"Successful candidates use {round_half_up(pos)} strong action verbs "
            f"vs {round_half_up(neg)} in rejected resumes.",
            _importance(_pct_change(pos - neg, neg, 50), confidence))

    # Weak verbs, lower is better
    pos, neg = averages(lambda p: p.action_verbs.weak_verb_count)
    if neg - pos > 1:
        add("action_verbs", "weak_verbs", round_half_up(pos), round_half_up(neg), round_half_up(pos - neg),
            _pct_change(neg - pos, pos, 100),
            f"Rejected resumes have {round_half_up(neg - pos)} more weak verbs "
            "(helped, assisted, worked) on average.",
            _importance(_pct_change(neg - pos, pos, 50), confidence))

    # Results-first framing
    pos, neg = averages(lambda p: p.achievements.results_first_count)
    if pos - neg > 2:
        add("achievement_framing", "results_first", round_half_up(pos), round_half_up(neg),
            round_half_up(pos - neg), _pct_change(pos - neg, neg, 100),
            f"Successful resumes lead {round_half_up(pos)} bullets with results "
            f"vs {round_half_up(neg)} in rejected ones.",
            _importance(_pct_change(pos - neg, neg, 50), confidence))

    # Detail level
    pos, neg = averages(lambda p: p.structure.bullet_count)
    delta = pos - neg
    if abs(delta) > 5:
        detail = "have more detail" if delta > 0 else "are more concise"
        add("structure", "bullet_count", round_half_up(pos), round_half_up(neg), round_half_up(delta),
            _pct_change(delta, neg, 100),
            f"Successful resumes {detail} ({round_half_up(pos)} vs {round_half_up(neg)} bullets).",
            _importance(_pct_change(delta, neg, 50), confidence))

    # Verb diversity, reported as percentages
    pos, neg = averages(lambda p: p.action_verbs.verb_diversity)
    if pos - neg > 0.1:
        add("action_verbs", "verb_diversity", round_half_up(pos * 100), round_half_up(neg * 100),
            round_half_up((pos - neg) * 100), _pct_change(pos - neg, neg, 100),
            f"Successful candidates vary their verbs more "
            f"({round_half_up(pos * 100)}% unique vs {round_half_up(neg * 100)}%).",
            "medium")

    insights.sort(key=lambda i: IMPORTANCE_ORDER[i.importance])

    high = sum(1 for i in insights if i.importance == "high")
    if high:
        summary = (
            f"Found {len(insights)} differentiating patterns ({high} high-impact) "
            f"from {pos_count} successful and {neg_count} rejected examples."
        )
    elif insights:
        summary = f"Found {len(insights)} patterns that differ between successful and rejected resumes."
    else:
        summary = "No significant differences found between successful and rejected resumes."

    logger.info(
        "Contrastive analysis: %d positive, %d negative, %d insights (%d high)",
        pos_count, neg_count, len(insights), high,
    )
    return ContrastiveAnalysisResult(
        has_contrastive_data=True,
        positive_count=pos_count,
        negative_count=neg_count,
        insights=insights,
        summary=summary,
    )


def _user_value(metric: str, user: ContentPatterns) -> float | None:
    values = {
        "metrics_per_bullet": user.quantification.avg_metrics_per_bullet,
        "total_metrics": user.quantification.metrics_count,
        "strong_verbs": user.action_verbs.strong_verb_count,
        "weak_verbs": user.action_verbs.weak_verb_count,
        "results_first": user.achievements.results_first_count,
        "bullet_count": user.structure.bullet_count,
        "verb_diversity": user.action_verbs.verb_diversity * 100,
    }
    return values.get(metric)


def _is_relevant(insight: ContrastiveInsight, user: ContentPatterns) -> bool:
    value = _user_value(insight.metric, user)
    if value is None:
        return False
    if insight.metric == "weak_verbs":
        return value > insight.positive_avg * WEAK_VERB_RATIO
    if insight.metric == "bullet_count":
        return abs(value - insight.positive_avg) > BULLET_COUNT_TOLERANCE
    return value < insight.positive_avg * RELEVANCE_RATIO


def contrastive_insights_to_suggestions(
    user: ContentPatterns,
    result: ContrastiveAnalysisResult,
) -> list[LearnedSuggestion]:
    """Keep the non-low insights where the user falls short of successful examples."""
    if not result.has_contrastive_data:
        return []
    return [
        LearnedSuggestion(type=insight.pattern, message=f"[Learned] {insight.insight}", importance=insight.importance)
        for insight in result.insights
        if insight.importance != "low" and _is_relevant(insight, user)
    ]
