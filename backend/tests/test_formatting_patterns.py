import pytest

from services.formatting_patterns import (
    detect_bullet_style,
    detect_date_formats,
    detect_heading_style,
    detect_quantified_metrics,
    detect_section_order,
    extract_formatting_patterns,
)


def test_extract_from_sample(sample_resume):
    patterns = extract_formatting_patterns(sample_resume)
    assert patterns.page_count == 1
    assert patterns.section_order == ["Contact", "Summary", "Experience", "Education", "Skills"]
    assert patterns.has_summary is True
    assert patterns.bullet_style.types == ["dash"]
    assert patterns.bullet_style.total_bullets == 6
    assert patterns.bullet_style.avg_bullets_per_entry == 3
    assert patterns.heading_style.styles == ["Title Case"]
    assert patterns.heading_style.consistent is True
    assert patterns.date_format.formats == ["Mon YYYY"]
    assert patterns.quantified_metrics.examples == ["40%", "30%", "25%", "500 customers"]
    assert patterns.word_count == len(sample_resume.split())


def test_explicit_page_count_wins(sample_resume):
    assert extract_formatting_patterns(sample_resume, page_count=3).page_count == 3


def test_page_count_from_word_count():
    text = "word " * 1200
    assert extract_formatting_patterns(text).page_count == 3


def test_empty_text():
    patterns = extract_formatting_patterns("")
    assert patterns.page_count == 1
    assert patterns.section_order == []
    assert patterns.white_space_ratio == 0.0
    assert patterns.avg_words_per_line == 0
    assert patterns.word_count == 0


def test_white_space_ratio():
    assert extract_formatting_patterns("a\n\nb").white_space_ratio == pytest.approx(0.33)


class TestSectionOrder:
    def test_heading_order(self):
        text = "Skills\nPython\nExperience\nAcme\nSkills\nAgain"
        assert detect_section_order(text) == ["Skills", "Experience"]

    def test_contact_inferred_from_header(self):
        text = "Jane\njane@example.com\nExperience\nAcme"
        assert detect_section_order(text) == ["Contact", "Experience"]

    def test_headings_must_stand_alone(self):
        assert detect_section_order("My experience includes Python") == []


class TestBulletStyle:
    def test_mixed_types_without_dates(self):
        style = detect_bullet_style("• one\n• two\n* three")
        assert style.types == ["dot", "asterisk"]
        assert style.total_bullets == 3
        assert style.avg_bullets_per_entry == 3

    def test_numbered(self):
        style = detect_bullet_style("1. first\n2) second")
        assert style.types == ["number"]
        assert style.total_bullets == 2

    def test_no_bullets(self):
        style = detect_bullet_style("plain text")
        assert style.types == []
        assert style.total_bullets == 0


class TestHeadingStyle:
    def test_mixed(self):
        style = detect_heading_style("SUMMARY\ntext\nExperience\ntext")
        assert style.styles == ["ALL_CAPS", "Title Case"]
        assert style.consistent is False

    def test_sentence_case(self):
        style = detect_heading_style("Work experience\ntext")
        assert style.styles == ["Sentence case"]

    def test_non_headings_ignored(self):
        assert detect_heading_style("HELLO WORLD").styles == []


class TestDateFormats:
    def test_mixed(self):
        formats = detect_date_formats("Jan 2020 and 03/2021")
        assert formats.formats == ["MM/YYYY", "Mon YYYY"]
        assert formats.consistent is False

    def test_may_counts_as_full_month(self):
        assert detect_date_formats("May 2020").formats == ["Month YYYY"]

    def test_may_with_full_months(self):
        assert detect_date_formats("May 2020 - June 2021").formats == ["Month YYYY"]

    def test_year_only(self):
        assert detect_date_formats("2019 - 2021").formats == ["YYYY"]

    def test_none(self):
        formats = detect_date_formats("no dates here")
        assert formats.formats == []
        assert formats.consistent is True


class TestQuantifiedMetrics:
    def test_kinds(self):
        metrics = detect_quantified_metrics("Saved $1.5M, grew 3x, served 1,200,000 users and 40 clients")
        assert "$1.5M" in metrics.examples
        assert "3x" in metrics.examples
        assert "1,200,000" in metrics.examples
        assert "40 clients" in metrics.examples

    def test_capped_at_ten(self):
        text = " ".join(f"{i}%" for i in range(1, 15))
        metrics = detect_quantified_metrics(text)
        assert metrics.count == 10
        assert metrics.examples[0] == "1%"

    def test_duplicates_counted_once(self):
        assert detect_quantified_metrics("20% and 20%").count == 1
