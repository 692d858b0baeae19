import pytest

from services.templates.styles import DEFAULT_STYLE, TEMPLATE_OVERRIDES, get_template_style


@pytest.mark.parametrize("template_id,body,gap", [
    ("classic", 10.5, 14),
    ("modern", 10, 14),
    ("minimalist", 9.5, 18),
    ("technical", 9.5, 14),
    ("executive", 10.5, 16),
])
def test_flattened_values(template_id, body, gap):
    style = get_template_style(template_id)
    assert style.body_font_size == pytest.approx(body)
    assert style.section_gap == gap


def test_overrides_merge_deeply():
    style = get_template_style("minimalist")
    assert style.spacing.page.left == 72
    assert style.features.bullet_style == "dash"
    # untouched nested keys keep their defaults
    assert style.colors.background == "#ffffff"
    assert style.features.section_uppercase is True


def test_classic_fonts():
    style = get_template_style("classic")
    assert style.typography.font_family.body == "Times-Roman"
    assert style.heading_font_size == 12


def test_unknown_template():
    style = get_template_style("neon")
    assert style == DEFAULT_STYLE


def test_default_not_mutated():
    for template_id in TEMPLATE_OVERRIDES:
        get_template_style(template_id)
    assert DEFAULT_STYLE.typography.font_size.body == 10.5
    assert DEFAULT_STYLE.spacing.section_gap == 14
