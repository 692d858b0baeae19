"""HR layer formatting analysis.

Compares a resume's formatting patterns against known-successful
reference resumes and turns each deviation into a suggestion that cites
how many references back it up. With no references, a fixed set of
industry rules is applied instead.
"""

import logging
from collections import Counter
from types import MappingProxyType

from models.responses import FormattingAnalysisResult, FormattingPatterns, FormattingSuggestion, HRFeedback
from services.formatting_patterns import extract_formatting_patterns
from services.numeric import clamp, round_half_up

logger = logging.getLogger(__name__)

KEY_SECTIONS: tuple[str, ...] = ("Experience", "Education", "Skills")

# A section joins the common order when at least this share of references has it
COMMON_SECTION_MIN_SHARE = 0.3


def analyze_formatting(
    resume_text: str,
    page_count: int | None = None,
    reference_patterns: list[FormattingPatterns] | None = None,
) -> FormattingAnalysisResult:
    """Score a resume's formatting, against references when any are given."""
    user = extract_formatting_patterns(resume_text, page_count)
    refs = list(reference_patterns or [])

    if refs:
        score, suggestions = _against_references(user, refs)
    else:
        score, suggestions = _standalone(user)

    logger.info(
        "Formatting analysis: score=%d suggestions=%d references=%d",
        score, len(suggestions), len(refs),
    )
    return FormattingAnalysisResult(
        score=score,
        suggestions=suggestions,
        feedback=suggestions_to_feedback(suggestions),
        user_patterns=user,
        reference_count=len(refs),
    )


# ---------------------------------------------------------------------------
# Standalone rules
# ---------------------------------------------------------------------------

def _standalone(user: FormattingPatterns) -> tuple[int, list[FormattingSuggestion]]:
    suggestions: list[FormattingSuggestion] = []
    score = 100

    if user.page_count > 2:
        score -= 15
        suggestions.append(FormattingSuggestion(
            aspect="page_count",
            user_value=f"{user.page_count} pages",
            reference_value="1-2 pages",
            percentage_support=90,
            message=f"Your resume is {user.page_count} pages. Most successful resumes are 1-2 pages.",
            severity="warning",
        ))

    if not user.has_summary:
        score -= 10
        suggestions.append(FormattingSuggestion(
            aspect="summary_section",
            user_value="No summary section",
            reference_value="Has summary section",
            percentage_support=75,
            message="Your resume doesn't have a summary or objective section. Most successful resumes include one.",
            severity="warning",
        ))

    if not user.heading_style.consistent:
        styles = ", ".join(user.heading_style.styles)
        score -= 10
        suggestions.append(FormattingSuggestion(
            aspect="heading_consistency",
            user_value=f"Mixed styles: {styles}",
            reference_value="Consistent heading style",
            percentage_support=88,
            message=f"Your headings use mixed styles ({styles}). Use a consistent heading style throughout.",
            severity="warning",
        ))

    if not user.date_format.consistent:
        formats = ", ".join(user.date_format.formats)
        score -= 8
        suggestions.append(FormattingSuggestion(
            aspect="date_consistency",
            user_value=f"Mixed formats: {formats}",
            reference_value="Consistent date format",
            percentage_support=85,
            message=f"Your resume uses mixed date formats ({formats}). Use a single consistent format.",
            severity="warning",
        ))

    metrics = user.quantified_metrics.count
    if metrics < 3:
        score -= 10
        suggestions.append(FormattingSuggestion(
            aspect="quantified_metrics",
            user_value=f"{metrics} metrics found",
            reference_value="3+ quantified metrics",
            percentage_support=80,
            message=(
                f"Your resume has only {metrics} quantified metric(s). Strong resumes include numbers, "
                "percentages, and dollar amounts to demonstrate impact."
            ),
            severity="critical" if metrics == 0 else "warning",
        ))

    bullets = user.bullet_style
    if bullets.total_bullets == 0:
        score -= 12
        suggestions.append(FormattingSuggestion(
            aspect="bullet_points",
            user_value="No bullet points detected",
            reference_value="Uses bullet points",
            percentage_support=92,
            message="No bullet points were detected. Use bullet points to list your achievements and responsibilities.",
            severity="critical",
        ))
    elif bullets.avg_bullets_per_entry > 7:
        score -= 5
        suggestions.append(FormattingSuggestion(
            aspect="bullet_density",
            user_value=f"{bullets.avg_bullets_per_entry} bullets per entry",
            reference_value="3-5 bullets per entry",
            percentage_support=78,
            message=(
                f"You have an average of {bullets.avg_bullets_per_entry} bullets per role. Most successful "
                "resumes use 3-5 bullets per role for readability."
            ),
            severity="info",
        ))

    missing = [s for s in KEY_SECTIONS if s not in user.section_order]
    if missing:
        score -= 5 * len(missing)
        suggestions.append(FormattingSuggestion(
            aspect="missing_sections",
            user_value=f"Missing: {', '.join(missing)}",
            reference_value="Has Experience, Education, Skills sections",
            percentage_support=95,
            message=(
                f"Your resume is missing key section(s): {', '.join(missing)}. "
                "Include these sections for a complete resume."
            ),
            severity="critical",
        ))

    return clamp(score), suggestions


# ---------------------------------------------------------------------------
# Reference comparison
# ---------------------------------------------------------------------------

def _share(count: int, total: int) -> int:
    return round_half_up(count / total * 100) if total else 0


def _mode(values: list[int]) -> int:
    """Most common value; ties go to the value that reached the count first."""
    counts: Counter[int] = Counter()
    best, best_count = (values[0] if values else 1), 0
    for v in values:
        counts[v] += 1
        if counts[v] > best_count:
            best, best_count = v, counts[v]
    return best


def common_section_order(refs: list[FormattingPatterns]) -> list[str]:
    """Sections present in enough references, ordered by mean position."""
    positions: dict[str, list[int]] = {}
    for p in refs:
        for i, section in enumerate(p.section_order):
            positions.setdefault(section, []).append(i)

    qualifying = [
        (section, sum(idx) / len(idx))
        for section, idx in positions.items()
        if len(idx) >= len(refs) * COMMON_SECTION_MIN_SHARE
    ]
    qualifying.sort(key=lambda item: item[1])
    return [section for section, _ in qualifying]


def _section_order_issue(user_order: list[str], common: list[str]) -> FormattingSuggestion | None:
    """First adjacent pair of common sections the user has reversed, if any."""
    for first, second in zip(common, common[1:]):
        if first not in user_order or second not in user_order:
            continue
        if user_order.index(first) > user_order.index(second):
            return FormattingSuggestion(
                aspect="section_order",
                user_value=f"{second} before {first}",
                reference_value=f"{first} before {second}",
                percentage_support=70,
                message=(
                    f'Most successful resumes place "{first}" before "{second}". '
                    "Consider reordering your sections."
                ),
                severity="info",
            )
    return None


def _against_references(
    user: FormattingPatterns, refs: list[FormattingPatterns]
) -> tuple[int, list[FormattingSuggestion]]:
    suggestions: list[FormattingSuggestion] = []
    score = 100
    n = len(refs)

    # Page count
    page_counts = [p.page_count for p in refs]
    mode_pages = _mode(page_counts)
    pct_at_mode = _share(page_counts.count(mode_pages), n)
    if user.page_count != mode_pages and pct_at_mode >= 60:
        deduction = 15 if user.page_count > mode_pages + 1 else 8
        score -= deduction
        suggestions.append(FormattingSuggestion(
            aspect="page_count",
            user_value=f"{user.page_count} page(s)",
            reference_value=f"{mode_pages} page(s)",
            percentage_support=pct_at_mode,
            message=(
                f"{pct_at_mode}% of successful resumes at your level use {mode_pages} page(s). "
                f"Yours is {user.page_count} page(s)."
            ),
            severity="critical" if deduction >= 15 else "warning",
        ))

    # Summary
    pct_summary = _share(sum(1 for p in refs if p.has_summary), n)
    if not user.has_summary and pct_summary >= 60:
        score -= 10
        suggestions.append(FormattingSuggestion(
            aspect="summary_section",
            user_value="No summary section",
            reference_value="Has summary section",
            percentage_support=pct_summary,
            message=f"{pct_summary}% of successful resumes include a summary section. Consider adding one.",
            severity="warning",
        ))

    # Section order, one issue at most
    common = common_section_order(refs)
    if len(common) >= 2:
        order_issue = _section_order_issue(user.section_order, common)
        if order_issue:
            score -= 5
            suggestions.append(order_issue)

    # Bullets
    avg_ref_bullets = round_half_up(sum(p.bullet_style.avg_bullets_per_entry for p in refs) / n)
    user_bullets = user.bullet_style
    if user_bullets.total_bullets == 0:
        pct_with_bullets = _share(sum(1 for p in refs if p.bullet_style.total_bullets > 0), n)
        if pct_with_bullets >= 50:
            score -= 12
            suggestions.append(FormattingSuggestion(
                aspect="bullet_points",
                user_value="No bullet points detected",
                reference_value=f"Uses bullet points (avg {avg_ref_bullets} per role)",
                percentage_support=pct_with_bullets,
                message=(
                    f"{pct_with_bullets}% of successful resumes use bullet points. "
                    "Add bullet points to describe your experience."
                ),
                severity="critical",
            ))
    elif abs(user_bullets.avg_bullets_per_entry - avg_ref_bullets) > 3:
        score -= 5
        pct_in_range = _share(
            sum(1 for p in refs if abs(p.bullet_style.avg_bullets_per_entry - avg_ref_bullets) <= 2), n
        )
        suggestions.append(FormattingSuggestion(
            aspect="bullet_density",
            user_value=f"{user_bullets.avg_bullets_per_entry} bullets per entry",
            reference_value=f"{avg_ref_bullets} bullets per entry",
            percentage_support=pct_in_range,
            message=(
                f"{pct_in_range}% of successful resumes have {avg_ref_bullets - 2}-{avg_ref_bullets + 2} "
                f"bullet points per role. You have {user_bullets.avg_bullets_per_entry}."
            ),
            severity="info",
        ))

    # Quantified metrics
    user_metrics = user.quantified_metrics.count
    avg_ref_metrics = round_half_up(sum(p.quantified_metrics.count for p in refs) / n)
    if user_metrics < avg_ref_metrics * 0.5:
        pct_with_more = _share(sum(1 for p in refs if p.quantified_metrics.count > user_metrics), n)
        deduction = 12 if user_metrics == 0 else 8
        score -= deduction
        suggestions.append(FormattingSuggestion(
            aspect="quantified_metrics",
            user_value=f"{user_metrics} metrics found",
            reference_value=f"Average {avg_ref_metrics} metrics",
            percentage_support=pct_with_more,
            message=(
                f"{pct_with_more}% of successful resumes have more quantified metrics than yours. "
                "Add numbers, percentages, and dollar amounts to demonstrate impact."
            ),
            severity="critical" if user_metrics == 0 else "warning",
        ))

    # Heading consistency
    if not user.heading_style.consistent:
        pct_consistent = _share(sum(1 for p in refs if p.heading_style.consistent), n)
        if pct_consistent >= 50:
            score -= 8
            suggestions.append(FormattingSuggestion(
                aspect="heading_consistency",
                user_value=f"Mixed styles: {', '.join(user.heading_style.styles)}",
                reference_value="Consistent heading style",
                percentage_support=pct_consistent,
                message=(
                    f"{pct_consistent}% of successful resumes use a consistent heading style. "
                    f"Yours mixes {' and '.join(user.heading_style.styles)}."
                ),
                severity="warning",
            ))

    # Date consistency
    if not user.date_format.consistent:
        pct_consistent = _share(sum(1 for p in refs if p.date_format.consistent), n)
        if pct_consistent >= 50:
            score -= 6
            suggestions.append(FormattingSuggestion(
                aspect="date_consistency",
                user_value=f"Mixed formats: {', '.join(user.date_format.formats)}",
                reference_value="Consistent date format",
                percentage_support=pct_consistent,
                message=(
                    f"{pct_consistent}% of successful resumes use a consistent date format. "
                    "Use one format throughout."
                ),
                severity="warning",
            ))

    # Key sections
    missing = [s for s in KEY_SECTIONS if s not in user.section_order]
    if missing:
        pct_with_all = _share(sum(1 for p in refs if all(s in p.section_order for s in KEY_SECTIONS)), n)
        score -= 5 * len(missing)
        suggestions.append(FormattingSuggestion(
            aspect="missing_sections",
            user_value=f"Missing: {', '.join(missing)}",
            reference_value="Has Experience, Education, Skills sections",
            percentage_support=pct_with_all,
            message=(
                f"{pct_with_all}% of successful resumes include Experience, Education, and Skills. "
                f"You're missing: {', '.join(missing)}."
            ),
            severity="critical",
        ))

    return clamp(score), suggestions


# ---------------------------------------------------------------------------
# Feedback conversion
# ---------------------------------------------------------------------------

_FIXED_ADVICE: MappingProxyType[str, str] = MappingProxyType({
    "quantified_metrics": "Add specific numbers, percentages, and dollar amounts to your bullet points.",
    "bullet_points": "Use dash (-) or dot (•) bullet points for each achievement.",
    "summary_section": "Add a 2-3 sentence professional summary at the top of your resume.",
    "heading_consistency": "Choose one heading style (e.g., ALL CAPS) and use it consistently.",
    "date_consistency": "Pick one date format (e.g., Month YYYY) and use it throughout.",
})


def _advice(s: FormattingSuggestion) -> str | None:
    if s.aspect in _FIXED_ADVICE:
        return _FIXED_ADVICE[s.aspect]
    if s.aspect == "missing_sections":
        return f"Add the missing section(s): {s.user_value.removeprefix('Missing: ')}."
    if s.aspect == "page_count":
        return f"Trim your resume to {s.reference_value}."
    if s.aspect == "section_order":
        return f"Reorder your sections: {s.reference_value}."
    if s.aspect == "bullet_density":
        return f"Aim for {s.reference_value} for readability."
    return None


def suggestions_to_feedback(suggestions: list[FormattingSuggestion]) -> list[HRFeedback]:
    return [
        HRFeedback(type="formatting", layer=1, severity=s.severity, message=s.message, suggestion=_advice(s))
        for s in suggestions
    ]
