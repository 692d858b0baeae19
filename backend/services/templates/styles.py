"""Resume template styles: a shared default plus per-template overrides."""

import logging
from types import MappingProxyType

from models.schemas.template_style import TemplateStyle

logger = logging.getLogger(__name__)

DEFAULT_STYLE = TemplateStyle()

TEMPLATE_OVERRIDES: MappingProxyType[str, dict] = MappingProxyType({
    "classic": {
        "colors": {
            "primary": "#1a1a1a", "secondary": "#4a4a4a", "text": "#333333", "heading": "#000000",
            "muted": "#555555", "border": "#666666",
        },
        "typography": {
            "font_family": {"heading": "Times-Bold", "body": "Times-Roman"},
            "font_size": {"section_heading": 12, "body": 10.5},
            "line_height": 1.35,
        },
    },
    "modern": {
        "colors": {
            "text": "#374151", "heading": "#111827", "muted": "#6b7280", "border": "#e5e7eb",
        },
        "typography": {
            "font_size": {"name": 20, "section_heading": 11, "body": 10},
        },
        "features": {"section_dividers": False},
    },
    "minimalist": {
        "colors": {
            "primary": "#525252", "secondary": "#737373", "text": "#404040", "heading": "#262626",
            "muted": "#a3a3a3", "border": "#d4d4d4",
        },
        "typography": {
            "font_family": {"heading": "Helvetica", "body": "Helvetica"},
            "font_size": {"name": 16, "section_heading": 9, "job_title": 10, "company": 9, "body": 9.5, "small": 8},
            "line_height": 1.5,
        },
        "spacing": {
            "page": {"top": 48, "bottom": 48, "left": 72, "right": 72},
            "section_gap": 18, "entry_gap": 12, "bullet_indent": 10,
        },
        "features": {
            "section_dividers": False, "bullet_style": "dash", "name_center": False, "contact_center": False,
        },
    },
    "technical": {
        "colors": {
            "primary": "#059669", "secondary": "#0d9488", "text": "#374151", "heading": "#064e3b",
            "muted": "#6b7280", "border": "#d1d5db",
        },
        "typography": {
            "font_family": {"heading": "Courier-Bold", "body": "Courier"},
            "font_size": {"name": 16, "section_heading": 11, "job_title": 10, "company": 9, "body": 9.5, "small": 8.5},
            "line_height": 1.35,
        },
        "features": {"bullet_style": "arrow", "section_uppercase": False},
    },
    "executive": {
        "colors": {
            "primary": "#44403c", "secondary": "#78716c", "text": "#292524", "heading": "#1c1917",
            "muted": "#a8a29e", "border": "#d6d3d1",
        },
        "typography": {
            "font_family": {"heading": "Times-Bold", "body": "Times-Roman"},
            "font_size": {"name": 22, "section_heading": 11, "body": 10.5},
        },
        "spacing": {
            "page": {"top": 54, "bottom": 54, "left": 72, "right": 72},
            "section_gap": 16, "entry_gap": 12, "bullet_indent": 14,
        },
    },
})


def _merge(base: dict, overrides: dict) -> dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_template_style(template_id: str) -> TemplateStyle:
    """Merge a template's overrides onto the default style.

    Unknown template ids fall back to the default style.
    """
    overrides = TEMPLATE_OVERRIDES.get(template_id)
    if overrides is None:
        logger.warning("Unknown template %r, using default style", template_id)
        overrides = {}

    data = _merge(DEFAULT_STYLE.model_dump(), overrides)
    data["body_font_size"] = data["typography"]["font_size"]["body"]
    data["heading_font_size"] = data["typography"]["font_size"]["section_heading"]
    data["section_gap"] = data["spacing"]["section_gap"]
    return TemplateStyle.model_validate(data)
