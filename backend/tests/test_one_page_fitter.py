import pytest

from models.schemas.structured_resume import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    Skills,
    StructuredResume,
)
from services.templates.one_page_fitter import (
    USABLE_HEIGHT,
    estimate_content_height,
    estimate_page_count,
    fit_to_one_page,
    remove_projects,
    shorten_summary,
    tighten_style,
    trim_skills,
    will_fit_one_page,
)
from services.templates.styles import DEFAULT_STYLE, get_template_style


def _resume(roles=1, bullets=3, education=1, summary="Short summary.", skills=None, **kwargs):
    return StructuredResume(
        summary=summary,
        experience=[
            ExperienceEntry(title=f"Engineer {i}", company=f"Co{i}", bullets=[f"Did thing {j}" for j in range(bullets)])
            for i in range(roles)
        ],
        education=[EducationEntry(school=f"School {i}", degree="BS") for i in range(education)],
        skills=skills if skills is not None else Skills(technical=["Python", "Go", "SQL", "Docker", "AWS"]),
        **kwargs,
    )


def _wide(roles, bullets):
    return _resume(roles=roles, bullets=bullets, education=0, summary="", skills=Skills())


def test_usable_height():
    assert USABLE_HEIGHT == 708


def test_estimate_small_resume():
    # header 60, summary 28, gaps 42, one role 98, one school 35, skills 14
    assert estimate_content_height(_resume(), get_template_style("classic")) == pytest.approx(277)


def test_smaller_font_reduces_height():
    resume = _wide(roles=3, bullets=5)
    assert estimate_content_height(resume, get_template_style("minimalist")) < estimate_content_height(
        resume, get_template_style("classic")
    )


class TestFitToOnePage:
    def test_already_fits(self):
        resume = _resume()
        result = fit_to_one_page(resume, "classic")
        assert result.removed_content == []
        assert result.fit_confidence == 95
        assert result.fitted_resume == resume

    def test_trim_to_four_bullets(self):
        result = fit_to_one_page(_wide(roles=5, bullets=8), "classic")
        assert result.fit_confidence == 90
        assert len(result.removed_content) == 20
        assert result.removed_content[0] == "[Co0] Did thing 4..."
        assert all(len(e.bullets) == 4 for e in result.fitted_resume.experience)

    def test_trim_to_three_bullets(self):
        result = fit_to_one_page(_wide(roles=6, bullets=8), "classic")
        assert result.fit_confidence == 85
        assert len(result.removed_content) == 30

    def test_drop_older_roles(self):
        result = fit_to_one_page(_wide(roles=20, bullets=2), "classic")
        assert result.fit_confidence == 55
        assert len(result.fitted_resume.experience) == 3
        assert result.removed_content[0] == "Removed: Engineer 3 @ Co3"
        assert result.adjusted_style.section_gap == 10
        assert result.adjusted_style.body_font_size == pytest.approx(10)

    def test_last_resort(self):
        resume = _resume(roles=1, bullets=5, education=40)
        result = fit_to_one_page(resume, "classic")
        assert result.fit_confidence == 40
        assert len(result.fitted_resume.experience[0].bullets) == 2
        assert len(result.removed_content) == 3

    def test_input_not_mutated(self):
        resume = _wide(roles=5, bullets=8)
        fit_to_one_page(resume, "classic")
        assert all(len(e.bullets) == 8 for e in resume.experience)

    def test_unknown_template_uses_default(self):
        result = fit_to_one_page(_resume(), "does-not-exist")
        assert result.adjusted_style.body_font_size == DEFAULT_STYLE.body_font_size


class TestSteps:
    def test_shorten_summary_at_sentence(self):
        resume = _resume(summary="A" * 149 + "." + "B" * 150)
        shortened, removed = shorten_summary(resume, 200)
        assert shortened.summary == "A" * 149 + "."
        assert removed == ["Summary shortened"]

    def test_shorten_summary_ellipsis(self):
        resume = _resume(summary="word " * 60)
        shortened, _ = shorten_summary(resume, 200)
        assert shortened.summary.endswith("...")
        assert len(shortened.summary) == 202

    def test_short_summary_untouched(self):
        resume = _resume()
        assert shorten_summary(resume, 200) == (resume, [])

    def test_trim_skills(self):
        resume = _resume(skills=Skills(technical=[f"s{i}" for i in range(10)], soft=["Talking"]))
        trimmed, removed = trim_skills(resume, 8)
        assert len(trimmed.skills.technical) == 8
        assert trimmed.skills.soft == ["Talking"]
        assert removed == ["Removed 2 technical skills"]

    def test_remove_projects(self):
        resume = _resume(projects=[ProjectEntry(name="Side project")])
        trimmed, removed = remove_projects(resume)
        assert trimmed.projects is None
        assert removed == ["Removed Projects section"]
        assert remove_projects(trimmed) == (trimmed, [])

    def test_tighten_style_floors(self):
        style = get_template_style("minimalist")
        tightened = tighten_style(tighten_style(style))
        assert tightened.body_font_size == pytest.approx(9.5)
        assert tightened.heading_font_size == 10
        assert tightened.section_gap == 10
        assert style.section_gap == 18


def test_will_fit_and_page_count():
    assert will_fit_one_page(_resume(), "classic") is True
    assert estimate_page_count(_resume(), "classic") == 1

    big = _wide(roles=5, bullets=8)
    assert will_fit_one_page(big, "classic") is False
    assert estimate_page_count(big, "classic") == 2
