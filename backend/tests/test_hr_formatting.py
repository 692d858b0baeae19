from models.responses import BulletStyle, FormattingPatterns
from services.formatting_patterns import extract_formatting_patterns
from services.hr_formatting import analyze_formatting, common_section_order

BARE_RESUME = "Experience\nWorked at a shop"

REORDERED_RESUME = """Jane Doe
jane@example.com

Summary
Engineer.

Skills
Python

Experience
- Built APIs

Education
State University
"""


class TestStandalone:
    def test_clean_resume(self, sample_resume):
        result = analyze_formatting(sample_resume)
        assert result.score == 100
        assert result.suggestions == []
        assert result.reference_count == 0

    def test_bare_resume(self):
        result = analyze_formatting(BARE_RESUME)
        assert [s.aspect for s in result.suggestions] == [
            "summary_section", "quantified_metrics", "bullet_points", "missing_sections",
        ]
        assert result.score == 58
        assert result.suggestions[1].severity == "critical"

    def test_long_resume(self, sample_resume):
        result = analyze_formatting(sample_resume, page_count=3)
        assert result.score == 85
        assert result.suggestions[0].aspect == "page_count"

    def test_feedback_mirrors_suggestions(self):
        result = analyze_formatting(BARE_RESUME)
        assert len(result.feedback) == len(result.suggestions)
        assert all(f.type == "formatting" and f.layer == 1 for f in result.feedback)
        assert result.feedback[-1].suggestion == "Add the missing section(s): Education, Skills."
        assert result.feedback[0].suggestion.startswith("Add a 2-3 sentence professional summary")


class TestAgainstReferences:
    def test_matches_references(self, sample_resume):
        refs = [extract_formatting_patterns(sample_resume)] * 3
        result = analyze_formatting(sample_resume, reference_patterns=refs)
        assert result.score == 100
        assert result.suggestions == []
        assert result.reference_count == 3

    def test_bare_resume(self, sample_resume):
        refs = [extract_formatting_patterns(sample_resume)] * 3
        result = analyze_formatting(BARE_RESUME, reference_patterns=refs)
        assert [s.aspect for s in result.suggestions] == [
            "summary_section", "bullet_points", "quantified_metrics", "missing_sections",
        ]
        assert all(s.percentage_support == 100 for s in result.suggestions)
        assert result.score == 56

    def test_page_count_against_mode(self, sample_resume):
        refs = [extract_formatting_patterns(sample_resume)] * 3

        longer = analyze_formatting(sample_resume, page_count=3, reference_patterns=refs)
        assert longer.score == 85
        assert longer.suggestions[0].severity == "critical"

        slightly_longer = analyze_formatting(sample_resume, page_count=2, reference_patterns=refs)
        assert slightly_longer.score == 92
        assert slightly_longer.suggestions[0].severity == "warning"

    def test_section_order(self):
        ref = FormattingPatterns(
            section_order=["Contact", "Summary", "Experience", "Skills"],
            has_summary=True,
            bullet_style=BulletStyle(types=["dash"], total_bullets=3, avg_bullets_per_entry=3),
        )
        result = analyze_formatting(REORDERED_RESUME, reference_patterns=[ref, ref])
        assert result.score == 95
        assert len(result.suggestions) == 1

        suggestion = result.suggestions[0]
        assert suggestion.aspect == "section_order"
        assert suggestion.user_value == "Skills before Experience"
        assert suggestion.percentage_support == 70
        assert suggestion.severity == "info"
        assert result.feedback[0].suggestion == "Reorder your sections: Experience before Skills."


def test_common_section_order():
    common = FormattingPatterns(section_order=["Contact", "Experience", "Skills"])
    rare = FormattingPatterns(section_order=["Contact", "Awards", "Experience", "Skills"])
    assert common_section_order([common] * 4 + [rare]) == ["Contact", "Experience", "Skills"]


def test_common_section_order_empty():
    assert common_section_order([]) == []
